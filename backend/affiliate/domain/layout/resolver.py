"""Turns a niche's stored layout JSON into concrete per-zone section lists."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .defaults import DEFAULT_LAYOUT
from .sections import LayoutConfig, LayoutZone, SectionConfig, SectionId, ZoneId

logger = logging.getLogger(__name__)

RawLayout = Union[Mapping[str, Any], LayoutConfig, None]


def _parse_section(raw: Any) -> Optional[SectionConfig]:
    if isinstance(raw, str):
        raw = {"id": raw}
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring malformed section descriptor: %r", raw)
        return None

    section_id = SectionId.parse(raw.get("id"))
    if section_id is None:
        logger.warning("Ignoring unknown layout section %r", raw.get("id"))
        return None

    props = raw.get("props") or {}
    if not isinstance(props, Mapping):
        props = {}

    condition = raw.get("conditionField", raw.get("condition_field"))
    return SectionConfig(
        id=section_id,
        enabled=raw.get("enabled", True) is not False,
        props=dict(props),
        condition_field=condition or None,
    )


def parse_layout_config(raw: RawLayout) -> Optional[LayoutConfig]:
    """Parse stored layout JSON.

    Unknown zones and section ids are dropped with a warning so a niche
    configured for a newer renderer set still renders on an older one.
    Returns ``None`` when there is nothing usable to parse.
    """
    if raw is None:
        return None
    if isinstance(raw, LayoutConfig):
        return raw
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring layout config of type %s", type(raw).__name__)
        return None

    zones: List[LayoutZone] = []
    for raw_zone in raw.get("zones") or []:
        if not isinstance(raw_zone, Mapping):
            continue
        zone_id = ZoneId.parse(raw_zone.get("id"))
        if zone_id is None:
            logger.warning("Ignoring unknown layout zone %r", raw_zone.get("id"))
            continue
        sections = [
            section
            for section in (_parse_section(s) for s in raw_zone.get("sections") or [])
            if section is not None
        ]
        zones.append(LayoutZone(id=zone_id, sections=sections))

    options = raw.get("options") or {}
    return LayoutConfig(zones=zones, options=dict(options) if isinstance(options, Mapping) else {})


def _merge_section(default: Optional[SectionConfig], override: SectionConfig) -> SectionConfig:
    if default is None:
        return override
    return SectionConfig(
        id=override.id,
        enabled=override.enabled,
        props={**default.props, **override.props},
        condition_field=override.condition_field or default.condition_field,
    )


def _merge_zone(default: Optional[LayoutZone], override: LayoutZone) -> LayoutZone:
    defaults_by_id = {s.id: s for s in default.sections} if default else {}

    merged: List[SectionConfig] = []
    seen = set()
    for section in override.sections:
        if section.id in seen:
            continue
        seen.add(section.id)
        merged.append(_merge_section(defaults_by_id.get(section.id), section))

    if default:
        merged.extend(s for s in default.sections if s.id not in seen)

    return LayoutZone(id=override.id, sections=[s for s in merged if s.enabled])


def resolve_layout(niche_config: RawLayout, default: LayoutConfig = DEFAULT_LAYOUT) -> LayoutConfig:
    """Merge a niche layout over ``default``.

    * no niche config, or one without zones: a copy of ``default``
    * zones the niche mentions: niche order first, then unmentioned default
      sections in default order; ``enabled: false`` removes a section
    * zones the niche does not mention: inherited from ``default``
    """
    parsed = parse_layout_config(niche_config)
    if parsed is None or not parsed.zones:
        return copy.deepcopy(default)

    overrides: Dict[ZoneId, LayoutZone] = {}
    for zone in parsed.zones:
        if zone.id in overrides:
            # Repeated zone ids are concatenated in order of appearance
            zone = LayoutZone(id=zone.id, sections=overrides[zone.id].sections + zone.sections)
        overrides[zone.id] = zone

    zones: List[LayoutZone] = []
    for zone in default.zones:
        if zone.id in overrides:
            zones.append(_merge_zone(zone, overrides.pop(zone.id)))
        else:
            zones.append(copy.deepcopy(zone))

    # Zones only the niche knows about (e.g. sidebar)
    for zone in parsed.zones:
        if zone.id in overrides:
            zones.append(_merge_zone(None, overrides.pop(zone.id)))

    return LayoutConfig(zones=zones, options={**default.options, **parsed.options})


def is_condition_met(section: SectionConfig, metadata: Optional[Mapping[str, Any]]) -> bool:
    """A section with a condition field renders only when that metadata key holds data."""
    if not section.condition_field:
        return True
    value = (metadata or {}).get(section.condition_field)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def visible_sections(
    layout: LayoutConfig,
    zone_id: ZoneId,
    metadata: Optional[Mapping[str, Any]],
) -> Iterable[SectionConfig]:
    zone = layout.zone(zone_id)
    if zone is None:
        return []
    return [
        section
        for section in zone.sections
        if section.enabled and is_condition_met(section, metadata)
    ]
