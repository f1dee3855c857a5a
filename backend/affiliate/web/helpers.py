from flask import current_app, request, url_for

from affiliate.content import Linkables, extract_shortcode_references, render_content
from affiliate.data import fetch_concurrently
from affiliate.data.content import get_linkables, get_product_lookup


def page_number():
    try:
        return max(int(request.args.get("page", 1)), 1)
    except (TypeError, ValueError):
        return 1


def page_url(page):
    """URL of the current listing at ``page``, keeping the other query args."""
    args = request.args.to_dict()
    args["page"] = page
    return url_for(request.endpoint, **(request.view_args or {}), **args)


def render_rich_content(site, content):
    """Stored HTML with shortcodes -> rendered blocks for ``site``.

    The shortcode lookup is required; the auto-link vocabulary is optional and
    falls back to no links if it cannot be read.
    """
    if not content:
        return []

    refs = extract_shortcode_references(content)
    auto_link = current_app.config.get("ENABLE_AUTO_LINK", True)

    loaders = {"lookup": lambda: get_product_lookup(site.id, refs)}
    if auto_link:
        loaders["linkables"] = lambda: get_linkables(site.id)

    results = fetch_concurrently(loaders, fallbacks={"linkables": Linkables()})
    return render_content(
        content,
        results["lookup"],
        site_slug=site.slug,
        linkables=results.get("linkables"),
        auto_link=auto_link,
    )
