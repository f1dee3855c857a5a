"""Tests for host -> site resolution, path rewriting and the WSGI middleware."""

import json

from affiliate.tenancy.mappings import build_domain_mappings, load_domain_mappings, write_domain_mappings
from affiliate.tenancy.resolver import (
    bare_domain,
    canonical_redirect,
    is_passthrough,
    resolve_request,
    resolve_site_slug,
    rewrite_path,
)

MAPPINGS = {
    "localhost": "demo-gaming",
    "thegaminghubguide.com": "demo-gaming",
    "glowpicks.com": "demo-beauty",
    "beauty.localhost:3000": "demo-beauty",
}


class TestResolveSiteSlug:
    def test_exact_domain(self):
        assert resolve_site_slug("glowpicks.com", MAPPINGS) == "demo-beauty"

    def test_port_and_case_are_ignored(self):
        assert resolve_site_slug("GlowPicks.com:8080", MAPPINGS) == "demo-beauty"

    def test_exact_host_with_port(self):
        assert resolve_site_slug("beauty.localhost:3000", MAPPINGS) == "demo-beauty"

    def test_override_wins(self):
        assert resolve_site_slug("glowpicks.com", MAPPINGS, override="demo-gaming") == "demo-gaming"

    def test_unknown_host_falls_back_to_localhost_mapping(self):
        assert resolve_site_slug("unknown.example", MAPPINGS) == "demo-gaming"

    def test_unknown_host_without_localhost_uses_default(self):
        assert resolve_site_slug("unknown.example", {}, default_slug="demo-beauty") == "demo-beauty"
        assert resolve_site_slug("unknown.example", {}) == "demo-gaming"

    def test_bare_domain(self):
        assert bare_domain("www.Example.com:8080") == "example.com"


class TestRewrite:
    def test_root(self):
        assert rewrite_path("/", "demo-gaming") == "/demo-gaming/"

    def test_nested(self):
        assert rewrite_path("/products/x", "demo-gaming") == "/demo-gaming/products/x"

    def test_already_scoped(self):
        assert rewrite_path("/demo-gaming/products", "demo-gaming") is None

    def test_prefix_of_slug_is_not_scoped(self):
        assert rewrite_path("/demo-gaming-old/x", "demo-gaming") == "/demo-gaming/demo-gaming-old/x"

    def test_passthrough(self):
        for path in ("/api", "/api/v1/sites", "/static/app.css", "/swagger/", "/uploads/a.png", "/openapi/admin.yaml"):
            assert is_passthrough(path)
        assert not is_passthrough("/apiary")


class TestResolveRequest:
    def test_www_redirect_keeps_path_and_query(self):
        resolution = resolve_request("www.glowpicks.com", "/products", {}, "page=2", MAPPINGS)
        assert resolution.redirect_to == "https://glowpicks.com/products?page=2"

    def test_redirect_honours_forwarded_proto(self):
        assert canonical_redirect("www.a.com", "/", "", "http") == "http://a.com/"

    def test_files_are_not_rewritten(self):
        resolution = resolve_request("glowpicks.com", "/robots.txt", {}, "", MAPPINGS)
        assert resolution.site_slug is None and resolution.path is None

    def test_query_override(self):
        resolution = resolve_request("localhost", "/products", {"site": "demo-beauty"}, "site=demo-beauty", MAPPINGS)
        assert resolution.site_slug == "demo-beauty"
        assert resolution.path == "/demo-beauty/products"


class TestMappingsFile:
    class _Site:
        def __init__(self, slug, domain):
            self.slug = slug
            self.domain = domain

    def test_build(self):
        mappings = build_domain_mappings([self._Site("a", "A.com"), self._Site("b", "b.com")])
        assert mappings == {
            "localhost": "a",
            "a.com": "a",
            "a.localhost": "a",
            "b.com": "b",
            "b.localhost": "b",
        }

    def test_write_then_load(self, tmp_path):
        path = tmp_path / "config" / "domain-mappings.json"
        write_domain_mappings({"a.com": "a"}, str(path))
        assert json.loads(path.read_text()) == {"a.com": "a"}
        assert load_domain_mappings({"DOMAIN_MAPPINGS": None, "DOMAIN_MAPPINGS_FILE": str(path)}) == {"a.com": "a"}

    def test_missing_file_is_empty(self, tmp_path):
        assert load_domain_mappings({"DOMAIN_MAPPINGS_FILE": str(tmp_path / "nope.json")}) == {}


class TestMiddleware:
    def test_www_host_redirects_permanently(self, client):
        response = client.get("/products?page=2", base_url="http://www.glowpicks.com")
        assert response.status_code == 301
        assert response.headers["Location"] == "https://glowpicks.com/products?page=2"

    def test_host_selects_site(self, client, seeded):
        beauty = client.get("/", base_url="http://glowpicks.com")
        gaming = client.get("/", base_url="http://thegaminghubguide.com")
        assert beauty.status_code == 200 and "Glow Picks" in beauty.get_data(as_text=True)
        assert gaming.status_code == 200 and "The Gaming Hub Guide" in gaming.get_data(as_text=True)

    def test_api_is_not_rewritten(self, client):
        assert client.get("/api/v1/health").status_code == 200

    def test_unknown_site_slug_is_404(self, client, seeded):
        response = client.get("/", query_string={"site": "no-such-site"})
        assert response.status_code == 404
