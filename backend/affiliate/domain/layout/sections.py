from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SectionId(str, Enum):
    BREADCRUMB = "breadcrumb"
    HERO = "hero"
    AFFILIATE_PARTNERS = "affiliate-partners"
    PROS_CONS = "pros-cons"
    FULL_REVIEW = "full-review"
    FEATURED_ARTICLES = "featured-articles"
    RELATED_PRODUCTS = "related-products"
    STICKY_BAR = "sticky-bar"
    # Gaming
    SPECIFICATIONS = "specifications"
    PERFORMANCE_METRICS = "performance-metrics"
    # Beauty
    INGREDIENTS = "ingredients"
    HOW_TO_USE = "how-to-use"
    SKIN_COMPATIBILITY = "skin-compatibility"

    @classmethod
    def parse(cls, value: Any) -> Optional["SectionId"]:
        try:
            return cls(value)
        except ValueError:
            return None


class ZoneId(str, Enum):
    HEADER = "header"
    HERO = "hero"
    MAIN = "main"
    SIDEBAR = "sidebar"
    OVERLAY = "overlay"

    @classmethod
    def parse(cls, value: Any) -> Optional["ZoneId"]:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class SectionConfig:
    id: SectionId
    enabled: bool = True
    props: Dict[str, Any] = field(default_factory=dict)
    # Metadata key that must hold a value for the section to render
    condition_field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id.value}
        if not self.enabled:
            data["enabled"] = False
        if self.props:
            data["props"] = dict(self.props)
        if self.condition_field:
            data["conditionField"] = self.condition_field
        return data


@dataclass(frozen=True)
class LayoutZone:
    id: ZoneId
    sections: List[SectionConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id.value,
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass(frozen=True)
class LayoutConfig:
    zones: List[LayoutZone] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def zone(self, zone_id: ZoneId) -> Optional[LayoutZone]:
        for zone in self.zones:
            if zone.id == zone_id:
                return zone
        return None

    def section_ids(self, zone_id: ZoneId) -> List[SectionId]:
        zone = self.zone(zone_id)
        return [section.id for section in zone.sections] if zone else []

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"zones": [zone.to_dict() for zone in self.zones]}
        if self.options:
            data["options"] = dict(self.options)
        return data
