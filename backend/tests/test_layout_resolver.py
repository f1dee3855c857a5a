"""Tests for niche layout parsing, merging and section conditions."""

from affiliate.domain.layout import (
    BEAUTY_LAYOUT,
    DEFAULT_LAYOUT,
    GAMING_LAYOUT,
    LayoutConfig,
    LayoutZone,
    SectionConfig,
    SectionId,
    ZoneId,
    is_condition_met,
    parse_layout_config,
    resolve_layout,
    visible_sections,
)


class TestResolveLayout:
    def test_no_niche_config_returns_default(self):
        layout = resolve_layout(None)
        assert layout == DEFAULT_LAYOUT
        assert layout is not DEFAULT_LAYOUT

    def test_config_without_zones_returns_default(self):
        assert resolve_layout({"zones": []}) == DEFAULT_LAYOUT
        assert resolve_layout({}) == DEFAULT_LAYOUT

    def test_unmentioned_zones_are_inherited(self):
        layout = resolve_layout({"zones": [{"id": "main", "sections": ["full-review"]}]})
        assert layout.section_ids(ZoneId.HEADER) == [SectionId.BREADCRUMB]
        assert layout.section_ids(ZoneId.HERO) == [SectionId.HERO, SectionId.AFFILIATE_PARTNERS]
        assert layout.section_ids(ZoneId.OVERLAY) == [SectionId.STICKY_BAR]

    def test_niche_order_first_then_remaining_defaults(self):
        layout = resolve_layout({"zones": [{"id": "main", "sections": ["related-products", "specifications"]}]})
        assert layout.section_ids(ZoneId.MAIN) == [
            SectionId.RELATED_PRODUCTS,
            SectionId.SPECIFICATIONS,
            SectionId.PROS_CONS,
            SectionId.FULL_REVIEW,
            SectionId.FEATURED_ARTICLES,
        ]

    def test_disabled_section_is_removed(self):
        layout = resolve_layout({
            "zones": [{"id": "overlay", "sections": [{"id": "sticky-bar", "enabled": False}]}]
        })
        assert layout.section_ids(ZoneId.OVERLAY) == []

    def test_props_merge_over_defaults(self):
        default = LayoutConfig(zones=[
            LayoutZone(
                id=ZoneId.MAIN,
                sections=[SectionConfig(id=SectionId.FULL_REVIEW, props={"heading": "Review", "showHeading": True})],
            ),
        ])
        layout = resolve_layout(
            {"zones": [{"id": "main", "sections": [{"id": "full-review", "props": {"heading": "Our Verdict"}}]}]},
            default=default,
        )
        section = layout.zone(ZoneId.MAIN).sections[0]
        assert section.props == {"heading": "Our Verdict", "showHeading": True}

    def test_zone_unknown_to_default_is_appended(self):
        layout = resolve_layout({"zones": [{"id": "sidebar", "sections": ["related-products"]}]})
        assert [zone.id for zone in layout.zones][-1] == ZoneId.SIDEBAR
        assert layout.section_ids(ZoneId.SIDEBAR) == [SectionId.RELATED_PRODUCTS]

    def test_options_merge(self):
        layout = resolve_layout({
            "zones": [{"id": "main", "sections": []}],
            "options": {"twoColumnHero": False},
        })
        assert layout.options["twoColumnHero"] is False
        assert layout.options["maxWidth"] == "default"

    def test_builtin_layouts_round_trip_through_json(self):
        for preset in (GAMING_LAYOUT, BEAUTY_LAYOUT):
            assert resolve_layout(preset.to_dict()) == preset


class TestParseLayoutConfig:
    def test_unknown_section_is_dropped(self, caplog):
        parsed = parse_layout_config({
            "zones": [{"id": "main", "sections": ["pros-cons", "hologram-viewer"]}]
        })
        assert parsed.section_ids(ZoneId.MAIN) == [SectionId.PROS_CONS]
        assert "hologram-viewer" in caplog.text

    def test_unknown_zone_is_dropped(self):
        parsed = parse_layout_config({"zones": [{"id": "footer", "sections": ["hero"]}]})
        assert parsed.zones == []

    def test_condition_field_accepts_both_spellings(self):
        parsed = parse_layout_config({
            "zones": [{
                "id": "main",
                "sections": [
                    {"id": "ingredients", "conditionField": "ingredients"},
                    {"id": "how-to-use", "condition_field": "howToUse"},
                ],
            }]
        })
        fields = [s.condition_field for s in parsed.zone(ZoneId.MAIN).sections]
        assert fields == ["ingredients", "howToUse"]

    def test_non_mapping_is_ignored(self):
        assert parse_layout_config(["hero"]) is None
        assert parse_layout_config(None) is None


class TestConditions:
    section = SectionConfig(id=SectionId.SPECIFICATIONS, condition_field="specifications")

    def test_unconditional_section_always_shows(self):
        assert is_condition_met(SectionConfig(id=SectionId.HERO), None)

    def test_missing_or_empty_values_hide_the_section(self):
        assert not is_condition_met(self.section, {})
        assert not is_condition_met(self.section, {"specifications": None})
        assert not is_condition_met(self.section, {"specifications": {}})
        assert not is_condition_met(self.section, {"specifications": []})
        assert not is_condition_met(self.section, {"specifications": "  "})
        assert not is_condition_met(self.section, {"specifications": False})

    def test_present_values_show_the_section(self):
        assert is_condition_met(self.section, {"specifications": {"CPU": "i9"}})
        assert is_condition_met(self.section, {"specifications": ["a"]})
        assert is_condition_met(self.section, {"specifications": 0})

    def test_visible_sections_filters_by_metadata(self):
        ids = [s.id for s in visible_sections(GAMING_LAYOUT, ZoneId.MAIN, {"benchmarks": [{"score": 1}]})]
        assert SectionId.PERFORMANCE_METRICS in ids
        assert SectionId.SPECIFICATIONS not in ids

    def test_visible_sections_for_missing_zone(self):
        assert list(visible_sections(DEFAULT_LAYOUT, ZoneId.SIDEBAR, {})) == []
