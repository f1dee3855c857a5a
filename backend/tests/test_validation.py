"""Tests for admin and contact payload validation and content lifecycle rules."""

import pytest

from affiliate.domain.lifecycle.content import IllegalTransition, assert_content_transition
from affiliate.domain.validation import (
    ValidationError,
    missing_ids,
    validate_article,
    validate_category,
    validate_contact,
    validate_product,
    validate_site,
    validate_user,
)

PRODUCT = {"title": "G Pro", "slug": "g-pro", "product_type": "gaming_mouse"}


def errors_of(fn, *args, **kwargs):
    with pytest.raises(ValidationError) as excinfo:
        fn(*args, **kwargs)
    return excinfo.value.fields


class TestProduct:
    def test_minimal_product_gets_defaults(self):
        cleaned = validate_product(PRODUCT)
        assert cleaned["status"] == "DRAFT"
        assert cleaned["price_currency"] == "USD"
        assert cleaned["meta"] == {}
        assert cleaned["is_active"] is True

    def test_required_fields(self):
        fields = errors_of(validate_product, {})
        assert set(fields) >= {"title", "slug", "product_type"}

    def test_slug_format(self):
        fields = errors_of(validate_product, {**PRODUCT, "slug": "Bad Slug"})
        assert "lowercase" in fields["slug"]

    def test_rating_range(self):
        assert "rating" in errors_of(validate_product, {**PRODUCT, "rating": 7})

    def test_price_order(self):
        fields = errors_of(validate_product, {**PRODUCT, "price_from": 50, "price_to": 10})
        assert "price_to" in fields

    def test_affiliate_links(self):
        fields = errors_of(validate_product, {
            **PRODUCT,
            "affiliate_links": [
                {"partner": "", "url": "not a url"},
                {"partner": "Amazon", "url": "https://amazon.com", "isPrimary": True},
                {"partner": "Ulta", "url": "https://ulta.com", "isPrimary": True},
            ],
        })
        assert "affiliate_links.0.partner" in fields
        assert "affiliate_links.0.url" in fields
        assert fields["affiliate_links"] == "only one affiliate link can be primary"

    def test_metadata_maps_to_meta(self):
        cleaned = validate_product({**PRODUCT, "metadata": {"pros": ["Light"]}})
        assert cleaned["meta"] == {"pros": ["Light"]}

    def test_partial_only_checks_given_fields(self):
        assert validate_product({"rating": 4.5}, partial=True) == {"rating": 4.5}

    def test_unknown_status(self):
        assert "status" in errors_of(validate_product, {**PRODUCT, "status": "LIVE"})


class TestOtherPayloads:
    def test_article_faqs(self):
        fields = errors_of(validate_article, {"title": "T", "slug": "t", "faqs": [{"question": "Q"}]})
        assert "faqs" in fields

    def test_article_type(self):
        cleaned = validate_article({"title": "T", "slug": "t", "article_type": "HOW_TO"})
        assert cleaned["article_type"] == "HOW_TO"
        assert "article_type" in errors_of(validate_article, {"title": "T", "slug": "t", "article_type": "LISTICLE"})

    def test_category_type_only_for_product_categories(self):
        assert "category_type" in errors_of(validate_category, {"name": "Mice", "slug": "mice"})
        assert validate_category({"name": "Guides", "slug": "guides"}, with_type=False)["slug"] == "guides"

    def test_site_theme_colors(self):
        fields = errors_of(validate_site, {
            "name": "A", "slug": "a", "domain": "a.com", "niche_id": "n",
            "theme": {"primaryColor": "blue"},
            "social": {"twitter": "nope"},
        })
        assert fields == {"theme.primaryColor": "Must be a valid hex color", "social.twitter": "must be a valid URL"}

    def test_site_content_slug(self):
        fields = errors_of(validate_site, {"name": "A", "slug": "a", "domain": "a.com", "niche_id": "n", "content_slug": "news"})
        assert "content_slug" in fields

    def test_user_password_rules(self):
        assert "password" in errors_of(validate_user, {"email": "a@b.co", "password": "short"})
        fields = errors_of(validate_user, {"email": "a@b.co", "password": "long-enough", "confirm_password": "other"})
        assert "confirm_password" in fields
        assert "password" not in validate_user({"name": "New"}, partial=True)

    def test_contact(self):
        fields = errors_of(validate_contact, {"name": "A", "email": "bad", "message": "short"})
        assert set(fields) == {"name", "email", "message"}
        cleaned = validate_contact({"name": "Ann", "email": "ann@example.com", "message": "Hello there, nice site!"})
        assert cleaned["subject"] is None


class TestLifecycle:
    @pytest.mark.parametrize("from_status,to_status", [
        ("DRAFT", "PUBLISHED"),
        ("PUBLISHED", "ARCHIVED"),
        ("ARCHIVED", "DRAFT"),
        ("PUBLISHED", "PUBLISHED"),
    ])
    def test_allowed(self, from_status, to_status):
        assert_content_transition(from_status=from_status, to_status=to_status)

    def test_archived_cannot_publish_directly(self):
        with pytest.raises(IllegalTransition):
            assert_content_transition(from_status="ARCHIVED", to_status="PUBLISHED")


def test_missing_ids_keeps_request_order():
    assert missing_ids(["c", "a", "b"], {"a": 1}) == ["c", "b"]
