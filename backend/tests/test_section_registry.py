"""Tests for product page section dispatch and zone composition."""

import pytest
from flask import g

from affiliate.data.records import CategoryRef, NicheRecord, ProductRecord, SiteRecord
from affiliate.content.renderer import RenderedBlock
from affiliate.domain.layout import (
    BEAUTY_LAYOUT,
    DEFAULT_LAYOUT,
    GAMING_LAYOUT,
    SectionConfig,
    SectionId,
    ZoneId,
    resolve_layout,
)
from affiliate.rendering.context import build_product_page_context
from affiliate.rendering.registry import (
    SECTION_REGISTRY,
    compose_product_page,
    get_section_renderer,
    render_section,
)
from markupsafe import Markup

SITE = SiteRecord(
    id="site-1",
    slug="demo-gaming",
    name="The Gaming Hub Guide",
    domain="thegaminghubguide.com",
    niche=NicheRecord(id="n-1", slug="gaming", name="Gaming"),
)


def make_product(**overrides):
    values = dict(
        id="p-1",
        site_id="site-1",
        slug="razer-blade-15",
        title="Razer Blade 15",
        product_type="gaming_laptop",
        excerpt="Thin and fast.",
        featured_image="https://cdn.example.com/blade.jpg",
        gallery_images=("https://cdn.example.com/blade-2.jpg",),
        price_from=1999.99,
        rating=4.6,
        review_count=212,
        affiliate_links=(
            {"partner": "Best Buy", "url": "https://www.bestbuy.com/x"},
            {"partner": "Amazon", "url": "https://www.amazon.com/x", "isPrimary": True},
        ),
        primary_affiliate_url="https://www.amazon.com/x",
        metadata={"pros": ["Fast"], "cons": ["Hot"]},
        categories=(CategoryRef(id="c-1", slug="laptops", name="Laptops", is_primary=True),),
    )
    values.update(overrides)
    return ProductRecord(**values)


@pytest.fixture
def request_ctx(app):
    with app.test_request_context("/demo-gaming/products/razer-blade-15"):
        g.site_slug = SITE.slug
        yield


class TestPageContext:
    def test_primary_link_and_cta(self):
        ctx = build_product_page_context(SITE, make_product())
        assert ctx.primary_partner == "Amazon"
        assert ctx.cta_text == "Check Price"
        assert ctx.product_url == "https://thegaminghubguide.com/products/razer-blade-15"

    def test_breadcrumbs_include_primary_category(self):
        ctx = build_product_page_context(SITE, make_product())
        assert [item.name for item in ctx.breadcrumb_items] == ["Home", "Products", "Laptops", "Razer Blade 15"]

    def test_images_featured_first(self):
        ctx = build_product_page_context(SITE, make_product())
        assert ctx.all_images == ("https://cdn.example.com/blade.jpg", "https://cdn.example.com/blade-2.jpg")

    def test_metadata_is_read_only(self):
        ctx = build_product_page_context(SITE, make_product())
        with pytest.raises(TypeError):
            ctx.metadata["pros"] = []


class TestRegistry:
    def test_every_section_id_has_a_renderer(self):
        assert set(SECTION_REGISTRY) == set(SectionId)

    def test_unknown_id_has_no_renderer(self):
        assert get_section_renderer("hologram-viewer") is None
        assert get_section_renderer("pros-cons") is SECTION_REGISTRY[SectionId.PROS_CONS]

    def test_pros_cons_renders_lists(self, request_ctx):
        ctx = build_product_page_context(SITE, make_product())
        html = render_section(SectionConfig(id=SectionId.PROS_CONS), ctx)
        assert "Fast" in html and "Hot" in html
        assert "What We Like" in html

    def test_props_override_headings(self, request_ctx):
        ctx = build_product_page_context(SITE, make_product())
        html = render_section(
            SectionConfig(id=SectionId.PROS_CONS, props={"prosLabel": "Strengths"}), ctx
        )
        assert "Strengths" in html

    def test_sections_without_data_render_nothing(self, request_ctx):
        ctx = build_product_page_context(SITE, make_product(metadata={}, primary_affiliate_url=None))
        assert render_section(SectionConfig(id=SectionId.PROS_CONS), ctx) is None
        assert render_section(SectionConfig(id=SectionId.SPECIFICATIONS), ctx) is None
        assert render_section(SectionConfig(id=SectionId.FULL_REVIEW), ctx) is None
        assert render_section(SectionConfig(id=SectionId.RELATED_PRODUCTS), ctx) is None
        assert render_section(SectionConfig(id=SectionId.STICKY_BAR), ctx) is None

    def test_hero_without_images_shows_placeholder(self, request_ctx):
        ctx = build_product_page_context(SITE, make_product(featured_image=None, gallery_images=()))
        html = render_section(SectionConfig(id=SectionId.HERO), ctx)
        assert "No image available" in html

    def test_specifications_accept_mapping_and_list(self, request_ctx):
        for specs in ({"CPU": "Intel Core i9"}, [{"label": "CPU", "value": "Intel Core i9"}]):
            ctx = build_product_page_context(SITE, make_product(metadata={"specifications": specs}))
            html = render_section(SectionConfig(id=SectionId.SPECIFICATIONS), ctx)
            assert "CPU" in html and "Intel Core i9" in html

    def test_performance_metrics_percent(self, request_ctx):
        ctx = build_product_page_context(
            SITE, make_product(metadata={"benchmarks": [{"name": "Cyberpunk", "score": 60, "maxScore": 120}]})
        )
        html = render_section(SectionConfig(id=SectionId.PERFORMANCE_METRICS), ctx)
        assert "Cyberpunk" in html
        assert "50%" in html

    def test_how_to_use_accepts_text(self, request_ctx):
        ctx = build_product_page_context(SITE, make_product(metadata={"howToUse": "Wet skin\nMassage\n\nRinse"}))
        html = render_section(SectionConfig(id=SectionId.HOW_TO_USE), ctx)
        assert "Massage" in html and "Rinse" in html


class TestComposeProductPage:
    def test_default_layout_two_column_hero(self, request_ctx):
        blocks = (RenderedBlock(kind="html", html=Markup("<p>Review body</p>")),)
        ctx = build_product_page_context(SITE, make_product(), content_blocks=blocks)
        page = compose_product_page(DEFAULT_LAYOUT, ctx)

        assert page.gallery is not None
        assert "hero-gallery" in page.gallery
        assert "hero-info" not in page.gallery
        assert page.section_ids(ZoneId.HERO) == [SectionId.HERO, SectionId.AFFILIATE_PARTNERS]
        assert "hero-info" in page.zone("hero")[0].html
        assert page.section_ids(ZoneId.MAIN) == [SectionId.PROS_CONS, SectionId.FULL_REVIEW]
        assert page.section_ids(ZoneId.OVERLAY) == [SectionId.STICKY_BAR]

    def test_single_column_hero(self, request_ctx):
        layout = resolve_layout({"zones": [{"id": "hero", "sections": ["hero"]}], "options": {"twoColumnHero": False}})
        page = compose_product_page(layout, build_product_page_context(SITE, make_product()))
        assert page.gallery is None
        html = page.zone("hero")[0].html
        assert "hero-gallery" in html and "hero-info" in html

    def test_gaming_sections_follow_metadata(self, request_ctx):
        product = make_product(metadata={"pros": ["Fast"], "specifications": {"GPU": "RTX 4070"}})
        page = compose_product_page(GAMING_LAYOUT, build_product_page_context(SITE, product))
        main = page.section_ids(ZoneId.MAIN)
        assert SectionId.SPECIFICATIONS in main
        assert SectionId.PERFORMANCE_METRICS not in main

    def test_beauty_skin_compatibility_in_hero(self, request_ctx):
        product = make_product(metadata={"skinTypes": ["Dry", "Oily"], "ingredients": ["Glycerin"]})
        page = compose_product_page(BEAUTY_LAYOUT, build_product_page_context(SITE, product))
        assert SectionId.SKIN_COMPATIBILITY in page.section_ids(ZoneId.HERO)
        assert SectionId.INGREDIENTS in page.section_ids(ZoneId.MAIN)
        assert SectionId.HOW_TO_USE not in page.section_ids(ZoneId.MAIN)
