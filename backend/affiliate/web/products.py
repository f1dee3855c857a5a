from flask import abort, current_app, g, render_template, request

from affiliate.data import fetch_concurrently
from affiliate.data.articles import get_articles_for_product
from affiliate.data.categories import get_categories
from affiliate.data.products import SORTS, get_product_by_slug, get_product_types, get_products, get_related_products
from affiliate.domain.layout import resolve_layout
from affiliate.rendering.context import build_product_page_context
from affiliate.rendering.registry import compose_product_page
from affiliate.seo.structured_data import breadcrumb_json_ld, product_json_ld_for
from . import site_bp
from .helpers import page_number, render_rich_content


@site_bp.route("/<site>/products", methods=["GET"])
def product_list():
    site = g.current_site
    sort = request.args.get("sort", "default")
    if sort not in SORTS:
        sort = "default"

    products = get_products(
        site.id,
        page=page_number(),
        per_page=current_app.config["PRODUCTS_PER_PAGE"],
        category_slug=request.args.get("category") or None,
        product_type=request.args.get("type") or None,
        sort=sort,
    )
    return render_template(
        "pages/products.html",
        products=products,
        categories=get_categories(site.id),
        product_types=get_product_types(site.id),
        sort=sort,
        sorts=list(SORTS),
    )


@site_bp.route("/<site>/products/<slug>", methods=["GET"])
def product_detail(slug):
    site = g.current_site
    product = get_product_by_slug(site.id, slug)
    if product is None:
        abort(404)

    related = fetch_concurrently(
        {
            "related_products": lambda: get_related_products(site.id, product.id, product.product_type),
            "featured_articles": lambda: get_articles_for_product(site.id, product.id),
        },
        fallbacks={"related_products": [], "featured_articles": []},
    )

    ctx = build_product_page_context(
        site,
        product,
        related_products=related["related_products"],
        featured_articles=related["featured_articles"],
        content_blocks=render_rich_content(site, product.content),
    )
    layout = resolve_layout(site.niche.layout_config if site.niche else None)
    page = compose_product_page(layout, ctx)

    return render_template(
        "pages/product.html",
        ctx=ctx,
        page=page,
        structured_data=[
            product_json_ld_for(ctx),
            breadcrumb_json_ld(ctx.breadcrumb_items),
        ],
    )
