"""End-to-end tests for the host-routed public pages."""

import json
import re

import pytest

from affiliate.extensions import db
from affiliate.models import Article, Product

BEAUTY = "http://glowpicks.com"


def text(response):
    return response.get_data(as_text=True)


def json_ld(html):
    return [json.loads(block) for block in re.findall(r'<script type="application/ld\+json">(.*?)</script>', html, re.S)]


@pytest.fixture(autouse=True)
def _seed(seeded):
    return seeded


class TestHome:
    def test_home(self, client):
        response = client.get("/")
        html = text(response)
        assert response.status_code == 200
        assert "The Gaming Hub Guide" in html
        assert "Razer Blade 15" in html
        assert "Best Gaming Picks This Year" in html
        assert 'href="/demo-gaming/products"' in html

    def test_theme_variables(self, client):
        assert "--site-primary: #7c3aed" in text(client.get("/"))

    def test_website_json_ld(self, client):
        types = [item["@type"] for item in json_ld(text(client.get("/")))]
        assert "WebSite" in types


class TestProducts:
    def test_list(self, client):
        html = text(client.get("/products"))
        assert "Razer Blade 15" in html
        assert "Logitech G Pro X Superlight" in html

    def test_list_filters(self, client):
        html = text(client.get("/products", query_string={"category": "mice", "sort": "bogus"}))
        assert "Logitech G Pro X Superlight" in html
        assert "Razer Blade 15" not in html

    def test_gaming_product_page_sections(self, client):
        response = client.get("/products/razer-blade-15")
        html = text(response)
        assert response.status_code == 200
        assert "section-specifications" in html
        assert "section-performance-metrics" in html
        assert "section-pros-cons" in html
        assert "section-sticky-bar" in html
        assert "section-ingredients" not in html
        assert "Check Price" in html

    def test_product_json_ld(self, client):
        items = json_ld(text(client.get("/products/razer-blade-15")))
        product = next(item for item in items if item["@type"] == "Product")
        assert product["url"] == "https://thegaminghubguide.com/products/razer-blade-15"
        assert product["offers"]["price"] == 1999.99
        assert any(item["@type"] == "BreadcrumbList" for item in items)

    def test_beauty_product_page_sections(self, client):
        html = text(client.get("/products/cerave-hydrating-cleanser", base_url=BEAUTY))
        assert "section-skin-compatibility" in html
        assert "section-ingredients" in html
        assert "section-how-to-use" in html
        assert "section-specifications" not in html
        assert "Shop Now" in html

    def test_draft_product_is_404(self, client, seeded):
        product = Product.query.filter_by(slug="razer-blade-15").one()
        product.status = "DRAFT"
        db.session.commit()
        assert client.get("/products/razer-blade-15").status_code == 404

    def test_product_from_other_site_is_404(self, client):
        assert client.get("/products/cerave-hydrating-cleanser").status_code == 404


class TestCategories:
    def test_list(self, client):
        html = text(client.get("/categories"))
        assert "Laptops" in html and "Mice" in html

    def test_detail(self, client):
        response = client.get("/categories/laptops")
        assert response.status_code == 200
        assert "Razer Blade 15" in text(response)

    def test_unknown_category(self, client):
        assert client.get("/categories/nope").status_code == 404


class TestContent:
    def test_list_uses_site_content_slug(self, client):
        assert client.get("/reviews").status_code == 200
        assert client.get("/guides").status_code == 404
        assert client.get("/guides", base_url=BEAUTY).status_code == 200

    def test_article_page(self, client):
        response = client.get("/reviews/best-picks")
        html = text(response)
        assert response.status_code == 200
        assert '<h2 id="our-top-picks">' in html
        assert "shortcode-product" in html
        assert "How do you choose products?" in html

    def test_article_json_ld(self, client):
        types = {item["@type"] for item in json_ld(text(client.get("/reviews/best-picks")))}
        assert {"ItemList", "BreadcrumbList", "FAQPage"} <= types

    def test_article_category_page(self, client):
        html = text(client.get("/reviews/buying-guides"))
        assert "Buying Guides" in html
        assert "Best Gaming Picks This Year" in html

    def test_categorized_article_url(self, client):
        assert client.get("/reviews/buying-guides/best-picks").status_code == 200
        assert client.get("/reviews/other-category/best-picks").status_code == 404

    def test_missing_shortcode_product_shows_placeholder(self, client, seeded):
        article = Article.query.filter_by(slug="best-picks", site_id=seeded["gaming"].id).one()
        article.content = "<p>Intro</p>[product:does-not-exist]"
        db.session.commit()

        html = text(client.get("/reviews/best-picks"))
        assert "Product not found: does-not-exist" in html


class TestStaticAndContact:
    def test_static_page(self, client):
        html = text(client.get("/about"))
        assert "About Us" in html

    def test_contact_form(self, client):
        assert client.get("/contact").status_code == 200

        bad = client.post("/contact", data={"name": "A", "email": "nope", "message": "hi"})
        assert bad.status_code == 400
        assert "Please enter a valid email address" in text(bad)

        good = client.post("/contact", data={
            "name": "Ann",
            "email": "ann@example.com",
            "message": "I love the reviews on this site.",
        })
        assert good.status_code == 200
        assert "Thanks for getting in touch" in text(good)


class TestSeoFiles:
    def test_robots(self, client):
        response = client.get("/robots.txt", base_url=BEAUTY)
        assert response.mimetype == "text/plain"
        assert "Sitemap: https://glowpicks.com/sitemap.xml" in text(response)

    def test_sitemap(self, client):
        response = client.get("/sitemap.xml")
        xml = text(response)
        assert response.mimetype == "application/xml"
        assert "<loc>https://thegaminghubguide.com/products/razer-blade-15</loc>" in xml
        assert "<loc>https://thegaminghubguide.com/reviews/best-picks</loc>" in xml
        assert "<loc>https://thegaminghubguide.com/categories/laptops</loc>" in xml

    def test_unknown_page_renders_site_404(self, client):
        response = client.get("/no/such/page/here")
        assert response.status_code == 404
        assert "Page not found" in text(response)
