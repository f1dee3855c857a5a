"""Section id -> renderer dispatch for product pages.

Every renderer takes the shared :class:`PageContext` plus the section's props
and returns markup, or ``None`` when it has nothing to show. Ids the registry
does not know are skipped with a warning so niche configs written for a newer
renderer set keep working.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from flask import render_template
from markupsafe import Markup

from affiliate.domain.layout import LayoutConfig, SectionConfig, SectionId, ZoneId, visible_sections
from .context import PageContext
from .formatting import rating_verdict, star_states

logger = logging.getLogger(__name__)

SectionRenderer = Callable[[PageContext, Mapping[str, Any]], Optional[Markup]]


def _render(name, ctx, props, **extra) -> Markup:
    return Markup(render_template(f"sections/{name}.html", ctx=ctx, props=props, **extra))


def _as_list(value):
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v not in (None, "")]
    return [value]


# -------------------------------------------------
# Base sections
# -------------------------------------------------

def render_breadcrumb(ctx, props):
    if not ctx.breadcrumb_items:
        return None
    return _render("breadcrumb", ctx, props)


def render_hero(ctx, props):
    mode = "full"
    if props.get("galleryOnly"):
        mode = "gallery"
    elif props.get("infoOnly"):
        mode = "info"
    # No images renders a placeholder tile instead of an empty gallery
    return _render(
        "hero",
        ctx,
        props,
        mode=mode,
        has_images=bool(ctx.all_images),
        stars=star_states(ctx.rating),
    )


def render_affiliate_partners(ctx, props):
    if not ctx.affiliate_links and not ctx.primary_affiliate_url:
        return None
    return _render("affiliate_partners", ctx, props)


def render_pros_cons(ctx, props):
    pros = _as_list(ctx.metadata.get("pros"))
    cons = _as_list(ctx.metadata.get("cons"))
    if not pros and not cons:
        return None
    return _render(
        "pros_cons",
        ctx,
        props,
        pros=pros,
        cons=cons,
        pros_label=props.get("prosLabel", "What We Like"),
        cons_label=props.get("consLabel", "What Could Be Better"),
        verdict=rating_verdict(ctx.rating) if props.get("showVerdict", True) else None,
    )


def render_full_review(ctx, props):
    if not ctx.content_blocks:
        return None
    return _render(
        "full_review",
        ctx,
        props,
        heading=props.get("heading", "Full Review"),
        show_heading=props.get("showHeading", True),
    )


def render_featured_articles(ctx, props):
    if not ctx.featured_articles:
        return None
    return _render("featured_articles", ctx, props, heading=props.get("heading", "Featured In"))


def render_related_products(ctx, props):
    if not ctx.related_products:
        return None
    return _render(
        "related_products",
        ctx,
        props,
        heading=props.get("heading", "Related Products"),
        view_all_text=props.get("viewAllText", "View all"),
    )


def render_sticky_bar(ctx, props):
    if not ctx.primary_affiliate_url:
        return None
    return _render("sticky_bar", ctx, props)


# -------------------------------------------------
# Niche sections
# -------------------------------------------------

def render_specifications(ctx, props):
    specs = ctx.metadata.get("specifications")
    if isinstance(specs, Mapping):
        rows = [(str(k), v) for k, v in specs.items() if v not in (None, "")]
    else:
        rows = [
            (item.get("label") or item.get("name"), item.get("value"))
            for item in _as_list(specs)
            if isinstance(item, Mapping)
        ]
    if not rows:
        return None
    return _render("specifications", ctx, props, rows=rows, heading=props.get("heading", "Specifications"))


def render_performance_metrics(ctx, props):
    metrics = []
    for item in _as_list(ctx.metadata.get("benchmarks")):
        if not isinstance(item, Mapping) or item.get("score") is None:
            continue
        max_score = item.get("maxScore") or 100
        try:
            percent = max(0, min(100, round(float(item["score"]) / float(max_score) * 100)))
        except (TypeError, ValueError, ZeroDivisionError):
            continue
        metrics.append({**item, "maxScore": max_score, "percent": percent})
    if not metrics:
        return None
    return _render(
        "performance_metrics", ctx, props, metrics=metrics,
        heading=props.get("heading", "Performance"),
    )


def render_ingredients(ctx, props):
    ingredients = [
        item if isinstance(item, Mapping) else {"name": str(item)}
        for item in _as_list(ctx.metadata.get("ingredients"))
    ]
    if not ingredients:
        return None
    return _render(
        "ingredients", ctx, props,
        key_ingredients=[i for i in ingredients if i.get("isKey")],
        ingredients=ingredients,
        heading=props.get("heading", "Ingredients"),
    )


def render_how_to_use(ctx, props):
    raw = ctx.metadata.get("howToUse")
    if isinstance(raw, str):
        raw = [line for line in raw.splitlines() if line.strip()]
    steps = []
    for index, item in enumerate(_as_list(raw), start=1):
        if isinstance(item, Mapping):
            steps.append({"step": item.get("step", index), "instruction": item.get("instruction"), "timing": item.get("timing")})
        else:
            steps.append({"step": index, "instruction": str(item), "timing": None})
    steps = [s for s in steps if s["instruction"]]
    if not steps:
        return None
    return _render("how_to_use", ctx, props, steps=steps, heading=props.get("heading", "How to Use"))


def render_skin_compatibility(ctx, props):
    skin_types = _as_list(ctx.metadata.get("skinTypes"))
    if not skin_types:
        return None
    return _render(
        "skin_compatibility", ctx, props, skin_types=skin_types,
        heading=props.get("heading", "Suitable For"),
    )


SECTION_REGISTRY: Dict[SectionId, SectionRenderer] = {
    SectionId.BREADCRUMB: render_breadcrumb,
    SectionId.HERO: render_hero,
    SectionId.AFFILIATE_PARTNERS: render_affiliate_partners,
    SectionId.PROS_CONS: render_pros_cons,
    SectionId.FULL_REVIEW: render_full_review,
    SectionId.FEATURED_ARTICLES: render_featured_articles,
    SectionId.RELATED_PRODUCTS: render_related_products,
    SectionId.STICKY_BAR: render_sticky_bar,
    SectionId.SPECIFICATIONS: render_specifications,
    SectionId.PERFORMANCE_METRICS: render_performance_metrics,
    SectionId.INGREDIENTS: render_ingredients,
    SectionId.HOW_TO_USE: render_how_to_use,
    SectionId.SKIN_COMPATIBILITY: render_skin_compatibility,
}


def get_section_renderer(section_id) -> Optional[SectionRenderer]:
    parsed = section_id if isinstance(section_id, SectionId) else SectionId.parse(section_id)
    if parsed is None:
        return None
    return SECTION_REGISTRY.get(parsed)


def render_section(section: SectionConfig, ctx: PageContext, extra_props=None) -> Optional[Markup]:
    renderer = get_section_renderer(section.id)
    if renderer is None:
        logger.warning("Section %r not found in registry", section.id)
        return None
    props = {**section.props, **(extra_props or {})}
    return renderer(ctx, props)


@dataclass
class RenderedSection:
    id: SectionId
    html: Markup


@dataclass
class ComposedPage:
    """Rendered sections per zone, in layout order."""

    zones: Dict[ZoneId, List[RenderedSection]] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)
    gallery: Optional[Markup] = None

    def zone(self, zone_id):
        return self.zones.get(ZoneId(zone_id), [])

    def section_ids(self, zone_id=None):
        zones = [ZoneId(zone_id)] if zone_id else list(self.zones)
        return [s.id for z in zones for s in self.zones.get(z, [])]


def render_zone(layout: LayoutConfig, zone_id: ZoneId, ctx: PageContext, extra_props=None) -> List[RenderedSection]:
    rendered = []
    for section in visible_sections(layout, zone_id, ctx.metadata):
        html = render_section(section, ctx, (extra_props or {}).get(section.id))
        if html is not None and str(html).strip():
            rendered.append(RenderedSection(id=section.id, html=html))
    return rendered


def compose_product_page(layout: LayoutConfig, ctx: PageContext) -> ComposedPage:
    """Dispatch every zone of ``layout`` against ``ctx``.

    With the ``twoColumnHero`` option the hero section renders twice: its
    gallery into the left column and its product info at the top of the
    right column, followed by the rest of the hero zone.
    """
    page = ComposedPage(options=dict(layout.options))
    two_column = layout.options.get("twoColumnHero", True)

    for zone in layout.zones:
        if zone.id == ZoneId.HERO and two_column:
            hero = next(
                (s for s in visible_sections(layout, zone.id, ctx.metadata) if s.id == SectionId.HERO),
                None,
            )
            if hero is not None:
                page.gallery = render_section(hero, ctx, {"galleryOnly": True})
            page.zones[zone.id] = render_zone(
                layout, zone.id, ctx, {SectionId.HERO: {"infoOnly": True}}
            )
        else:
            page.zones[zone.id] = render_zone(layout, zone.id, ctx)

    return page
