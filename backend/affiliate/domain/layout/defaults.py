"""Built-in product page layouts.

``DEFAULT_LAYOUT`` is what every niche without a stored ``layout_config``
renders with. The gaming and beauty presets are written into niche rows by the
seed command and serve as examples of niche overrides.
"""

from .sections import LayoutConfig, LayoutZone, SectionConfig, SectionId, ZoneId

DEFAULT_OPTIONS = {
    "twoColumnHero": True,
    "maxWidth": "default",
}


def _zone(zone_id, *sections):
    return LayoutZone(
        id=zone_id,
        sections=[
            s if isinstance(s, SectionConfig) else SectionConfig(id=s)
            for s in sections
        ],
    )


DEFAULT_LAYOUT = LayoutConfig(
    options=dict(DEFAULT_OPTIONS),
    zones=[
        _zone(ZoneId.HEADER, SectionId.BREADCRUMB),
        _zone(ZoneId.HERO, SectionId.HERO, SectionId.AFFILIATE_PARTNERS),
        _zone(
            ZoneId.MAIN,
            SectionId.PROS_CONS,
            SectionId.FULL_REVIEW,
            SectionId.FEATURED_ARTICLES,
            SectionId.RELATED_PRODUCTS,
        ),
        _zone(ZoneId.OVERLAY, SectionId.STICKY_BAR),
    ],
)

GAMING_LAYOUT = LayoutConfig(
    options=dict(DEFAULT_OPTIONS),
    zones=[
        _zone(ZoneId.HEADER, SectionId.BREADCRUMB),
        _zone(ZoneId.HERO, SectionId.HERO, SectionId.AFFILIATE_PARTNERS),
        _zone(
            ZoneId.MAIN,
            SectionId.PROS_CONS,
            SectionConfig(id=SectionId.SPECIFICATIONS, condition_field="specifications"),
            SectionConfig(id=SectionId.PERFORMANCE_METRICS, condition_field="benchmarks"),
            SectionId.FULL_REVIEW,
            SectionId.FEATURED_ARTICLES,
            SectionId.RELATED_PRODUCTS,
        ),
        _zone(ZoneId.OVERLAY, SectionId.STICKY_BAR),
    ],
)

BEAUTY_LAYOUT = LayoutConfig(
    options=dict(DEFAULT_OPTIONS),
    zones=[
        _zone(ZoneId.HEADER, SectionId.BREADCRUMB),
        _zone(
            ZoneId.HERO,
            SectionId.HERO,
            SectionId.AFFILIATE_PARTNERS,
            SectionConfig(id=SectionId.SKIN_COMPATIBILITY, condition_field="skinTypes"),
        ),
        _zone(
            ZoneId.MAIN,
            SectionId.PROS_CONS,
            SectionConfig(id=SectionId.INGREDIENTS, condition_field="ingredients"),
            SectionConfig(id=SectionId.HOW_TO_USE, condition_field="howToUse"),
            SectionId.FULL_REVIEW,
            SectionId.FEATURED_ARTICLES,
            SectionId.RELATED_PRODUCTS,
        ),
        _zone(ZoneId.OVERLAY, SectionId.STICKY_BAR),
    ],
)

BUILTIN_LAYOUTS = {
    "gaming": GAMING_LAYOUT,
    "beauty": BEAUTY_LAYOUT,
}
