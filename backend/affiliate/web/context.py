from flask import abort, current_app, g

from affiliate.data.sites import get_site_by_slug
from affiliate.rendering import urls
from affiliate.rendering.formatting import format_price, star_states
from affiliate.rendering.theme import theme_css_variables
from affiliate.seo.structured_data import website_json_ld
from .helpers import page_url
from . import site_bp


@site_bp.url_value_preprocessor
def pull_site_slug(endpoint, values):
    if values is not None:
        g.site_slug = values.pop("site", None)


@site_bp.url_defaults
def add_site_slug(endpoint, values):
    if "site" not in values and g.get("site_slug"):
        values["site"] = g.site_slug


@site_bp.before_request
def load_site():
    g.pop("current_site", None)
    slug = g.get("site_slug")
    if slug is None:
        return
    site = get_site_by_slug(slug)
    if site is None:
        current_app.logger.info("No active site for slug %r", slug)
        abort(404)
    g.current_site = site


@site_bp.context_processor
def inject_site():
    site = g.get("current_site")
    if site is None:
        return {}
    return {
        "site": site,
        "theme_vars": theme_css_variables(site.theme),
        "content_nav_label": urls.content_nav_label(site.content_slug),
        "content_list_url": urls.content_list_path(site.slug, site.content_slug),
        "website_ld": website_json_ld(
            name=site.name,
            url=urls.canonical_url(site),
            description=site.description or site.tagline,
            logo=site.logo_url,
        ),
    }


@site_bp.app_template_filter("price")
def price_filter(amount, currency="USD"):
    return format_price(amount, currency) or ""


site_bp.add_app_template_global(star_states, "star_states")
site_bp.add_app_template_global(page_url, "page_url")
site_bp.add_app_template_global(urls, "urls")
