"""Public URL helpers.

Internal links are site-scoped paths (``/{site}/products/x``); canonical and
structured-data URLs use the site's own domain.
"""

CONTENT_SECTION_TITLES = {
    "reviews": "Reviews & Buying Guides",
    "articles": "Articles",
    "guides": "Guides",
    "blog": "Blog",
}

CONTENT_NAV_LABELS = {
    "reviews": "Reviews",
    "articles": "Articles",
    "guides": "Guides",
    "blog": "Blog",
}

CONTENT_SECTION_DESCRIPTIONS = {
    "reviews": "Expert reviews, product roundups, and comprehensive buying guides to help you make informed decisions.",
    "articles": "In-depth articles covering the latest trends, tips, and insights.",
    "guides": "Comprehensive guides to help you navigate your choices.",
    "blog": "Our latest posts, news, and updates.",
}


def canonical_url(site, path=""):
    domain = (site.domain or "example.com").rstrip("/")
    if path and not path.startswith("/"):
        path = f"/{path}"
    return f"https://{domain}{path}"


def product_path(site_slug, product_slug):
    return f"/{site_slug}/products/{product_slug}"


def category_path(site_slug, category_slug):
    return f"/{site_slug}/categories/{category_slug}"


def content_list_path(site_slug, content_slug="reviews"):
    return f"/{site_slug}/{content_slug or 'reviews'}"


def article_path(site_slug, article_slug, content_slug="reviews", category_slug=None):
    base = content_list_path(site_slug, content_slug)
    if category_slug:
        return f"{base}/{category_slug}/{article_slug}"
    return f"{base}/{article_slug}"


def article_category_path(site_slug, category_slug, content_slug="reviews"):
    return f"{content_list_path(site_slug, content_slug)}/{category_slug}"


def content_section_title(content_slug):
    return CONTENT_SECTION_TITLES.get(content_slug, CONTENT_SECTION_TITLES["reviews"])


def content_nav_label(content_slug):
    return CONTENT_NAV_LABELS.get(content_slug, CONTENT_NAV_LABELS["reviews"])


def content_section_description(content_slug):
    return CONTENT_SECTION_DESCRIPTIONS.get(content_slug, CONTENT_SECTION_DESCRIPTIONS["reviews"])
