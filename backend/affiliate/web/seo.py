from flask import Response, abort, current_app, render_template, request

from affiliate.data.articles import get_article_sitemap_entries
from affiliate.data.categories import get_categories
from affiliate.data.products import get_product_sitemap_entries
from affiliate.data.sites import get_site_by_slug
from affiliate.rendering import urls
from affiliate.tenancy.resolver import resolve_site_slug
from . import site_bp


def _site_for_host():
    """robots.txt and sitemap.xml bypass path rewriting, so resolve the host here."""
    slug = resolve_site_slug(
        request.host,
        current_app.extensions.get("domain_mappings", {}),
        override=request.args.get(current_app.config.get("SITE_OVERRIDE_PARAM", "site")),
        default_slug=current_app.config.get("DEFAULT_SITE_SLUG"),
    )
    site = get_site_by_slug(slug)
    if site is None:
        abort(404)
    return site


@site_bp.route("/robots.txt", methods=["GET"])
def robots_txt():
    site = _site_for_host()
    lines = [
        "User-agent: *",
        "Allow: /",
        "Disallow: /api/",
        "",
        f"Sitemap: {urls.canonical_url(site, '/sitemap.xml')}",
    ]
    return Response("\n".join(lines) + "\n", mimetype="text/plain")


@site_bp.route("/sitemap.xml", methods=["GET"])
def sitemap_xml():
    site = _site_for_host()
    content = site.content_slug

    entries = [
        (urls.canonical_url(site, "/"), None),
        (urls.canonical_url(site, "/products"), None),
        (urls.canonical_url(site, "/categories"), None),
        (urls.canonical_url(site, f"/{content}"), None),
    ]
    entries += [
        (urls.canonical_url(site, f"/products/{slug}"), updated_at)
        for slug, updated_at in get_product_sitemap_entries(site.id)
    ]
    entries += [
        (urls.canonical_url(site, f"/categories/{category.slug}"), None)
        for category in get_categories(site.id)
    ]
    entries += [
        (urls.canonical_url(site, f"/{content}/{slug}"), updated_at)
        for slug, updated_at in get_article_sitemap_entries(site.id)
    ]

    xml = render_template("sitemap.xml", entries=entries)
    return Response(xml, mimetype="application/xml")
