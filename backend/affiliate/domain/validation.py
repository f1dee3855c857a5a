"""Field-level validation for admin and contact form payloads.

Each ``validate_*`` function takes the raw JSON body and returns a cleaned
dict of model attributes, or raises :class:`ValidationError` carrying one
message per offending field. Nothing is persisted when validation fails.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import urlparse

from affiliate.models import ARTICLE_TYPES, CONTENT_SLUGS, CONTENT_STATUSES, ROLES

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(Exception):
    def __init__(self, fields: Dict[str, str]):
        self.fields = dict(fields)
        super().__init__(next(iter(self.fields.values()), "Validation failed"))


def is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class _Form:
    """Accumulates cleaned values and per-field errors for one payload."""

    def __init__(self, data: Optional[Mapping[str, Any]], *, partial: bool = False):
        self.data = data or {}
        self.partial = partial
        self.cleaned: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}

    def _skip(self, name):
        return self.partial and name not in self.data

    def string(self, name, *, required=False, min_len=0, max_len=None, pattern=None,
               pattern_msg=None, choices=None, default=None, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                self.errors[name] = f"{name} is required"
            else:
                self.cleaned[attr] = default
            return
        if not isinstance(value, str):
            self.errors[name] = f"{name} must be a string"
            return
        value = value.strip()
        if len(value) < min_len:
            self.errors[name] = f"{name} must be at least {min_len} characters"
        elif max_len is not None and len(value) > max_len:
            self.errors[name] = f"{name} must be at most {max_len} characters"
        elif pattern is not None and not pattern.match(value):
            self.errors[name] = pattern_msg or f"{name} is invalid"
        elif choices is not None and value not in choices:
            self.errors[name] = f"{name} must be one of: {', '.join(choices)}"
        else:
            self.cleaned[attr] = value

    def url(self, name, *, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name)
        if value in (None, ""):
            self.cleaned[attr] = None
        elif not isinstance(value, str) or not is_url(value):
            self.errors[name] = f"{name} must be a valid URL"
        else:
            self.cleaned[attr] = value

    def number(self, name, *, minimum=None, maximum=None, integer=False, default=None, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name)
        if value in (None, ""):
            self.cleaned[attr] = default
            return
        if isinstance(value, bool):
            self.errors[name] = f"{name} must be a number"
            return
        try:
            number = int(value) if integer else float(value)
        except (TypeError, ValueError):
            self.errors[name] = f"{name} must be a number"
            return
        if minimum is not None and number < minimum:
            self.errors[name] = f"{name} must be at least {minimum}"
        elif maximum is not None and number > maximum:
            self.errors[name] = f"{name} must be at most {maximum}"
        else:
            self.cleaned[attr] = number

    def boolean(self, name, *, default=False, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name, default)
        if not isinstance(value, bool):
            self.errors[name] = f"{name} must be true or false"
        else:
            self.cleaned[attr] = value

    def string_list(self, name, *, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name) or []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            self.errors[name] = f"{name} must be a list of strings"
        else:
            self.cleaned[attr] = value

    def mapping(self, name, *, default=None, attr=None):
        if self._skip(name):
            return
        attr = attr or name
        value = self.data.get(name)
        if value is None:
            self.cleaned[attr] = {} if default is None else default
        elif not isinstance(value, dict):
            self.errors[name] = f"{name} must be an object"
        else:
            self.cleaned[attr] = value

    def result(self) -> Dict[str, Any]:
        if self.errors:
            raise ValidationError(self.errors)
        return self.cleaned


def _validate_affiliate_links(form: _Form):
    if form._skip("affiliate_links"):
        return
    links = form.data.get("affiliate_links") or []
    if not isinstance(links, list):
        form.errors["affiliate_links"] = "affiliate_links must be a list"
        return

    cleaned = []
    for index, link in enumerate(links):
        if not isinstance(link, dict):
            form.errors[f"affiliate_links.{index}"] = "must be an object"
            continue
        partner = link.get("partner")
        url = link.get("url")
        if not isinstance(partner, str) or not partner.strip():
            form.errors[f"affiliate_links.{index}.partner"] = "partner is required"
        if not isinstance(url, str) or not is_url(url):
            form.errors[f"affiliate_links.{index}.url"] = "url must be a valid URL"
        item = {"partner": (partner or "").strip(), "url": url}
        if link.get("label"):
            item["label"] = link["label"]
        if link.get("isPrimary"):
            item["isPrimary"] = True
        cleaned.append(item)

    if sum(1 for link in cleaned if link.get("isPrimary")) > 1:
        form.errors["affiliate_links"] = "only one affiliate link can be primary"

    form.cleaned["affiliate_links"] = cleaned


def validate_product(data, *, partial=False) -> Dict[str, Any]:
    form = _Form(data, partial=partial)
    form.string("title", required=True, min_len=1, max_len=200)
    form.string("slug", required=True, pattern=SLUG_RE,
                pattern_msg="slug may only contain lowercase letters, numbers and hyphens")
    form.string("excerpt", max_len=500)
    form.string("description")
    form.string("content")
    form.url("featured_image")
    form.string_list("gallery_images")
    form.number("price_from", minimum=0)
    form.number("price_to", minimum=0)
    form.string("price_currency", max_len=3, default="USD")
    form.string("price_text", max_len=100)
    form.number("rating", minimum=0, maximum=5)
    form.number("review_count", minimum=0, integer=True, default=0)
    _validate_affiliate_links(form)
    form.url("primary_affiliate_url")
    form.string("product_type", required=True, min_len=1)
    form.mapping("metadata", attr="meta")
    form.string("seo_title", max_len=70)
    form.string("seo_description", max_len=160)
    form.string("status", choices=CONTENT_STATUSES, default="DRAFT")
    form.boolean("is_featured", default=False)
    form.boolean("is_active", default=True)
    form.number("sort_order", minimum=0, integer=True, default=0)
    form.string_list("category_ids")
    form.string("primary_category_id")

    cleaned = form.result()
    if (
        cleaned.get("price_from") is not None
        and cleaned.get("price_to") is not None
        and cleaned["price_to"] < cleaned["price_from"]
    ):
        raise ValidationError({"price_to": "price_to must not be lower than price_from"})
    return cleaned


def validate_article(data, *, partial=False) -> Dict[str, Any]:
    form = _Form(data, partial=partial)
    form.string("title", required=True, min_len=1, max_len=200)
    form.string("slug", required=True, pattern=SLUG_RE,
                pattern_msg="slug may only contain lowercase letters, numbers and hyphens")
    form.string("excerpt", max_len=500)
    form.string("content")
    form.url("featured_image")
    form.string("article_type", choices=ARTICLE_TYPES, default="ROUNDUP")
    form.string("status", choices=CONTENT_STATUSES, default="DRAFT")
    form.string("author_name", max_len=100)
    form.boolean("is_featured", default=False)
    form.string("category_id")
    form.string("seo_title", max_len=70)
    form.string("seo_description", max_len=160)
    form.string_list("product_ids")

    if not form._skip("faqs"):
        faqs = form.data.get("faqs") or []
        if not isinstance(faqs, list) or not all(
            isinstance(f, dict) and f.get("question") and f.get("answer") for f in faqs
        ):
            form.errors["faqs"] = "each FAQ needs a question and an answer"
        else:
            form.cleaned["faqs"] = [{"question": f["question"], "answer": f["answer"]} for f in faqs]

    return form.result()


def validate_category(data, *, partial=False, with_type=True) -> Dict[str, Any]:
    form = _Form(data, partial=partial)
    form.string("name", required=True, min_len=1, max_len=100)
    form.string("slug", required=True, pattern=SLUG_RE,
                pattern_msg="slug may only contain lowercase letters, numbers and hyphens")
    form.string("description", max_len=1000)
    form.string("parent_id")
    form.boolean("is_active", default=True)
    form.number("sort_order", minimum=0, integer=True, default=0)
    if with_type:
        form.string("category_type", required=True, min_len=1)
        form.url("image")
    return form.result()


def validate_site(data, *, partial=False) -> Dict[str, Any]:
    form = _Form(data, partial=partial)
    form.string("name", required=True, min_len=1, max_len=255)
    form.string("slug", required=True, pattern=SLUG_RE,
                pattern_msg="slug may only contain lowercase letters, numbers and hyphens")
    form.string("domain", required=True, max_len=255)
    form.string("tagline", max_len=255)
    form.string("description")
    form.url("logo_url")
    form.string("niche_id", required=True)
    form.string("gtm_id", max_len=50)
    form.string("content_slug", choices=CONTENT_SLUGS, default="reviews")
    form.boolean("is_active", default=True)
    form.mapping("theme")
    form.mapping("social")
    cleaned = form.result()

    errors = {}
    for key in ("primaryColor", "secondaryColor", "accentColor", "backgroundColor", "textColor"):
        value = (cleaned.get("theme") or {}).get(key)
        if value is not None and not HEX_COLOR_RE.match(str(value)):
            errors[f"theme.{key}"] = "Must be a valid hex color"
    for network, url in (cleaned.get("social") or {}).items():
        if url and not (isinstance(url, str) and is_url(url)):
            errors[f"social.{network}"] = "must be a valid URL"
    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_user(data, *, partial=False) -> Dict[str, Any]:
    form = _Form(data, partial=partial)
    form.string("email", required=True, pattern=EMAIL_RE, pattern_msg="Invalid email address")
    form.string("name", max_len=200)
    form.string("role", choices=ROLES, default="OWNER")
    form.boolean("is_active", default=True)
    form.string_list("site_ids")

    password = form.data.get("password")
    if password or not partial:
        if not isinstance(password, str) or len(password) < 8:
            form.errors["password"] = "Password must be at least 8 characters"
        elif form.data.get("confirm_password") not in (None, password):
            form.errors["confirm_password"] = "Passwords do not match"
        else:
            form.cleaned["password"] = password
    return form.result()


def validate_contact(data) -> Dict[str, Any]:
    form = _Form(data)
    form.string("name", required=True, min_len=2, max_len=100)
    form.string("email", required=True, pattern=EMAIL_RE, pattern_msg="Please enter a valid email address")
    form.string("subject", max_len=200)
    form.string("message", required=True, min_len=10, max_len=5000)
    return form.result()


def missing_ids(requested: Iterable[str], found: Iterable[str]):
    found = set(found)
    return [item for item in requested if item not in found]
