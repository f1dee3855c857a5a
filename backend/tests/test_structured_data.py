"""Tests for schema.org JSON-LD builders and display formatting."""

from datetime import datetime, timezone

from affiliate.rendering.formatting import (
    cta_text,
    format_price,
    format_product_price,
    rating_verdict,
    star_states,
    truncate,
)
from affiliate.rendering.theme import theme_css_variables
from affiliate.seo.structured_data import (
    article_json_ld,
    article_schema_type,
    breadcrumb_json_ld,
    faq_json_ld,
    product_json_ld,
    website_json_ld,
)


class TestProductJsonLd:
    def test_full_product(self):
        data = product_json_ld(
            name="Razer Blade 15",
            url="https://thegaminghubguide.com/products/razer-blade-15",
            images=["https://cdn/x.jpg"],
            price=1999.99,
            currency="USD",
            rating=4.6,
            review_count=212,
            affiliate_url="https://amazon.com/x",
        )
        assert data["@type"] == "Product"
        assert data["aggregateRating"]["ratingValue"] == 4.6
        assert data["aggregateRating"]["reviewCount"] == 212
        assert data["offers"]["price"] == 1999.99
        assert data["offers"]["availability"] == "https://schema.org/InStock"
        assert data["offers"]["url"] == "https://amazon.com/x"

    def test_optional_blocks_are_omitted(self):
        data = product_json_ld(name="Mystery", url="https://a.com/products/m")
        assert "aggregateRating" not in data
        assert "offers" not in data
        assert "image" not in data
        assert "description" not in data

    def test_zero_review_count_is_omitted(self):
        data = product_json_ld(name="x", url="u", rating=4.0, review_count=0)
        assert "reviewCount" not in data["aggregateRating"]


class TestArticleJsonLd:
    common = dict(headline="Best Mice", url="https://a.com/reviews/best-mice", publisher="A")

    def test_schema_types(self):
        assert article_schema_type("REVIEW") == "Review"
        assert article_schema_type("HOW_TO") == "HowTo"
        assert article_schema_type("ROUNDUP") == "ItemList"
        assert article_schema_type("BUYING_GUIDE") == "Article"
        assert article_schema_type(None) == "Article"

    def test_roundup_with_products_is_item_list(self):
        data = article_json_ld(
            article_type="ROUNDUP",
            products=[{"name": "A", "url": "https://a.com/products/a"}, {"name": "B", "url": "https://a.com/products/b"}],
            **self.common,
        )
        assert data["@type"] == "ItemList"
        assert data["numberOfItems"] == 2
        assert [item["position"] for item in data["itemListElement"]] == [1, 2]

    def test_roundup_without_products_is_article(self):
        data = article_json_ld(article_type="ROUNDUP", **self.common)
        assert data["@type"] == "Article"

    def test_review_with_item_and_rating(self):
        data = article_json_ld(
            article_type="REVIEW",
            reviewed_item={"name": "G Pro", "url": "https://a.com/products/g-pro"},
            rating=4.8,
            author="Jane",
            date_published=datetime(2024, 1, 2, tzinfo=timezone.utc),
            **self.common,
        )
        assert data["@type"] == "Review"
        assert data["itemReviewed"] == {"@type": "Product", "name": "G Pro", "url": "https://a.com/products/g-pro"}
        assert data["reviewRating"]["ratingValue"] == 4.8
        assert data["author"] == {"@type": "Person", "name": "Jane"}
        assert data["datePublished"] == "2024-01-02T00:00:00+00:00"

    def test_publisher_logo(self):
        data = article_json_ld(article_type="BUYING_GUIDE", publisher_logo="https://a.com/logo.png", **self.common)
        assert data["publisher"]["logo"]["url"] == "https://a.com/logo.png"


class TestOtherJsonLd:
    def test_breadcrumbs(self):
        data = breadcrumb_json_ld([{"name": "Home", "url": "https://a.com"}, {"name": "Mice", "url": "https://a.com/m"}])
        assert [e["position"] for e in data["itemListElement"]] == [1, 2]
        assert data["itemListElement"][1]["item"] == "https://a.com/m"
        assert breadcrumb_json_ld([]) is None

    def test_faq_skips_incomplete_entries(self):
        data = faq_json_ld([{"question": "Q?", "answer": "A."}, {"question": "No answer"}])
        assert len(data["mainEntity"]) == 1
        assert data["mainEntity"][0]["acceptedAnswer"]["text"] == "A."
        assert faq_json_ld([]) is None

    def test_website_search_action(self):
        data = website_json_ld(name="A", url="https://a.com", search_url="https://a.com/search?q={search_term_string}")
        assert data["potentialAction"]["@type"] == "SearchAction"
        assert "publisher" not in data


class TestFormatting:
    def test_format_price(self):
        assert format_price(1299.99, "USD") == "$1,300"
        assert format_price(15, "GBP") == "£15"
        assert format_price(10, "CHF") == "CHF 10"
        assert format_price(None) is None
        assert format_price("abc") is None

    def test_price_range(self):
        price = format_product_price(10, 20, "USD", None)
        assert (price.primary, price.secondary) == ("$10", "$20")
        assert not format_product_price(None, None, "USD", None)
        assert format_product_price(None, None, "USD", "Free")

    def test_cta_by_niche(self):
        assert cta_text("beauty") == "Shop Now"
        assert cta_text("travel") == "Book Now"
        assert cta_text("unknown") == "Check Price"
        assert cta_text(None) == "Check Price"

    def test_stars(self):
        assert star_states(3.5) == ["full", "full", "full", "half", "empty"]
        assert star_states(5) == ["full"] * 5
        assert star_states(None) == ["empty"] * 5

    def test_verdict(self):
        assert rating_verdict(4.7) == "Excellent"
        assert rating_verdict(3.2) == "Average"
        assert rating_verdict(1.0) == "Below Average"
        assert rating_verdict(None) is None

    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("a" * 200, 10) == "aaaaaaa..."

    def test_theme_defaults_and_overrides(self):
        variables = dict(theme_css_variables({"primaryColor": "#000000", "fontFamily": "Inter"}))
        assert variables["--site-primary"] == "#000000"
        assert variables["--site-secondary"] == "#1e293b"
        assert variables["--site-font"] == "Inter"
