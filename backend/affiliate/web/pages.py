from flask import abort, current_app, g, render_template

from affiliate.data.articles import get_recent_articles
from affiliate.data.categories import (
    get_category_breadcrumbs,
    get_category_by_slug,
    get_category_tree,
)
from affiliate.data.products import get_featured_products, get_products
from affiliate.rendering import urls
from affiliate.rendering.context import BreadcrumbItem
from affiliate.seo.structured_data import breadcrumb_json_ld
from affiliate.data import fetch_concurrently
from . import site_bp
from .helpers import page_number

STATIC_PAGES = {
    "about": "About Us",
    "disclaimer": "Affiliate Disclaimer",
    "privacy": "Privacy Policy",
    "terms": "Terms of Service",
}


@site_bp.route("/<site>/", methods=["GET"])
def home():
    site = g.current_site
    data = fetch_concurrently(
        {
            "featured": lambda: get_featured_products(site.id),
            "articles": lambda: get_recent_articles(site.id),
            "categories": lambda: get_category_tree(site.id),
        },
        fallbacks={"articles": [], "categories": []},
    )
    return render_template(
        "pages/home.html",
        featured_products=data["featured"],
        recent_articles=data["articles"],
        categories=data["categories"],
    )


@site_bp.route("/<site>/categories", methods=["GET"])
def category_list():
    site = g.current_site
    return render_template("pages/categories.html", categories=get_category_tree(site.id))


@site_bp.route("/<site>/categories/<slug>", methods=["GET"])
def category_detail(slug):
    site = g.current_site
    category = get_category_by_slug(site.id, slug)
    if category is None:
        abort(404)

    products = get_products(
        site.id,
        page=page_number(),
        per_page=current_app.config["PRODUCTS_PER_PAGE"],
        category_slug=category.slug,
    )

    base_url = urls.canonical_url(site)
    trail = [BreadcrumbItem("Home", base_url), BreadcrumbItem("Categories", f"{base_url}/categories")]
    trail += [
        BreadcrumbItem(node.name, f"{base_url}/categories/{node.slug}")
        for node in get_category_breadcrumbs(site.id, category.id)
    ]

    return render_template(
        "pages/category.html",
        category=category,
        products=products,
        breadcrumbs=trail,
        breadcrumb_ld=breadcrumb_json_ld(trail),
    )


@site_bp.route("/<site>/<any(about, disclaimer, privacy, terms):page>", methods=["GET"])
def static_page(page):
    return render_template("pages/static.html", page=page, title=STATIC_PAGES[page])
