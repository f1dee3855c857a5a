from .sections import SectionId, ZoneId, SectionConfig, LayoutZone, LayoutConfig
from .defaults import (
    DEFAULT_LAYOUT,
    GAMING_LAYOUT,
    BEAUTY_LAYOUT,
    BUILTIN_LAYOUTS,
)
from .resolver import (
    parse_layout_config,
    resolve_layout,
    is_condition_met,
    visible_sections,
)

__all__ = [
    "SectionId",
    "ZoneId",
    "SectionConfig",
    "LayoutZone",
    "LayoutConfig",
    "DEFAULT_LAYOUT",
    "GAMING_LAYOUT",
    "BEAUTY_LAYOUT",
    "BUILTIN_LAYOUTS",
    "parse_layout_config",
    "resolve_layout",
    "is_condition_met",
    "visible_sections",
]
