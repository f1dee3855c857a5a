from flask import abort, current_app, g, render_template

from affiliate.content import add_heading_ids, extract_headings
from affiliate.data import fetch_concurrently
from affiliate.data.articles import get_article_by_slug, get_articles, get_related_articles
from affiliate.data.categories import (
    get_article_categories,
    get_article_category_breadcrumbs,
    get_article_category_by_slug,
)
from affiliate.data.products import get_products_by_ids
from affiliate.rendering import urls
from affiliate.rendering.context import BreadcrumbItem
from affiliate.seo.structured_data import article_json_ld, breadcrumb_json_ld, faq_json_ld
from . import site_bp
from .helpers import page_number, render_rich_content

CONTENT_SLUG_RULE = "<any(reviews, articles, guides, blog):content_slug>"


def _require_content_slug(site, content_slug):
    # Every site exposes exactly one content section
    if content_slug != site.content_slug:
        abort(404)


def _content_trail(site, content_slug):
    base_url = urls.canonical_url(site)
    return [
        BreadcrumbItem("Home", base_url),
        BreadcrumbItem(urls.content_nav_label(content_slug), f"{base_url}/{content_slug}"),
    ]


@site_bp.route(f"/<site>/{CONTENT_SLUG_RULE}", methods=["GET"])
def content_list(content_slug):
    site = g.current_site
    _require_content_slug(site, content_slug)

    articles = get_articles(site.id, page=page_number(), per_page=current_app.config["ARTICLES_PER_PAGE"])
    return render_template(
        "pages/content_list.html",
        title=urls.content_section_title(content_slug),
        description=urls.content_section_description(content_slug),
        articles=articles,
        categories=get_article_categories(site.id, with_articles_only=True),
    )


@site_bp.route(f"/<site>/{CONTENT_SLUG_RULE}/<slug>", methods=["GET"])
def content_entry(content_slug, slug):
    """An article, or failing that an article category, with this slug."""
    site = g.current_site
    _require_content_slug(site, content_slug)

    article = get_article_by_slug(site.id, slug)
    if article is not None:
        return _render_article(site, content_slug, article)

    category = get_article_category_by_slug(site.id, slug)
    if category is None:
        abort(404)

    trail = _content_trail(site, content_slug)
    base_url = urls.canonical_url(site)
    trail += [
        BreadcrumbItem(node.name, f"{base_url}/{content_slug}/{node.slug}")
        for node in get_article_category_breadcrumbs(site.id, category.id)
    ]
    articles = get_articles(
        site.id,
        page=page_number(),
        per_page=current_app.config["ARTICLES_PER_PAGE"],
        category_slug=category.slug,
    )
    return render_template(
        "pages/article_category.html",
        category=category,
        articles=articles,
        breadcrumbs=trail,
        breadcrumb_ld=breadcrumb_json_ld(trail),
    )


@site_bp.route(f"/<site>/{CONTENT_SLUG_RULE}/<category_slug>/<slug>", methods=["GET"])
def categorized_article(content_slug, category_slug, slug):
    site = g.current_site
    _require_content_slug(site, content_slug)

    article = get_article_by_slug(site.id, slug)
    if article is None or article.category is None or article.category.slug != category_slug:
        abort(404)
    return _render_article(site, content_slug, article)


def _render_article(site, content_slug, article):
    category = article.category
    related = fetch_concurrently(
        {
            "products": lambda: get_products_by_ids(site.id, article.product_ids),
            "related_articles": lambda: get_related_articles(
                site.id, article.id, category.id if category else None
            ),
        },
        fallbacks={"related_articles": []},
    )
    products = related["products"]

    base_url = urls.canonical_url(site)
    trail = _content_trail(site, content_slug)
    if category:
        trail.append(BreadcrumbItem(category.name, f"{base_url}/{content_slug}/{category.slug}"))
    path = f"/{content_slug}/{category.slug}/{article.slug}" if category else f"/{content_slug}/{article.slug}"
    article_url = urls.canonical_url(site, path)
    trail.append(BreadcrumbItem(article.title, article_url))

    structured_data = [
        article_json_ld(
            article_type=article.article_type,
            headline=article.seo_title or article.title,
            url=article_url,
            publisher=site.name,
            description=article.seo_description or article.excerpt,
            image=article.featured_image,
            author=article.author_name,
            publisher_logo=site.logo_url,
            date_published=article.published_at,
            date_modified=article.updated_at,
            reviewed_item=_reviewed_item(site, products),
            rating=products[0].rating if len(products) == 1 else None,
            products=[
                {
                    "name": p.title,
                    "url": urls.canonical_url(site, f"/products/{p.slug}"),
                    "image": p.featured_image,
                    "description": p.excerpt,
                }
                for p in products
            ],
        ),
        breadcrumb_json_ld(trail),
        faq_json_ld(article.faqs),
    ]

    return render_template(
        "pages/article.html",
        article=article,
        blocks=render_rich_content(site, article.content),
        toc=extract_headings(add_heading_ids(article.content or "")),
        products=products,
        related_articles=related["related_articles"],
        breadcrumbs=trail,
        structured_data=[item for item in structured_data if item],
    )


def _reviewed_item(site, products):
    if len(products) != 1:
        return None
    product = products[0]
    return {
        "name": product.title,
        "url": urls.canonical_url(site, f"/products/{product.slug}"),
        "image": product.featured_image,
    }
