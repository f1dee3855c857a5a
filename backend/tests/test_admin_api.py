"""Tests for the JWT-protected admin API under /api/v1."""

import io

import pytest

from affiliate.models import Category, Media


def site_id(client, headers, slug):
    items = client.get("/api/v1/sites", headers=headers).get_json()["items"]
    return next(item["id"] for item in items if item["slug"] == slug)


@pytest.fixture
def gaming_id(client, admin_headers):
    return site_id(client, admin_headers, "demo-gaming")


@pytest.fixture
def beauty_id(client, admin_headers):
    return site_id(client, admin_headers, "demo-beauty")


class TestAuth:
    def test_login_returns_tokens_and_user(self, client, seeded):
        response = client.post("/api/v1/auth/login", json={"email": "ADMIN@example.com", "password": "admin-password"})
        body = response.get_json()
        assert response.status_code == 200
        assert body["access_token"] and body["refresh_token"]
        assert body["user"]["role"] == "ADMIN"

    def test_bad_password(self, client, seeded):
        response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "wrong"})
        assert response.status_code == 401

    def test_missing_body(self, client):
        assert client.post("/api/v1/auth/login").status_code == 400

    def test_me(self, client, owner_headers):
        body = client.get("/api/v1/auth/me", headers=owner_headers).get_json()
        assert body["email"] == "owner@example.com"

    def test_token_required(self, client, seeded):
        assert client.get("/api/v1/sites").status_code == 401


class TestSiteAccess:
    def test_admin_sees_every_site(self, client, admin_headers):
        items = client.get("/api/v1/sites", headers=admin_headers).get_json()["items"]
        assert {item["slug"] for item in items} == {"demo-gaming", "demo-beauty"}

    def test_owner_sees_assigned_sites(self, client, owner_headers):
        items = client.get("/api/v1/sites", headers=owner_headers).get_json()["items"]
        assert [item["slug"] for item in items] == ["demo-gaming"]

    def test_owner_is_redirected_from_other_site(self, client, owner_headers, beauty_id):
        response = client.get(f"/api/v1/sites/{beauty_id}/products", headers=owner_headers)
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/api/v1/sites")

    def test_owner_can_manage_own_site(self, client, owner_headers, gaming_id):
        response = client.get(f"/api/v1/sites/{gaming_id}/products", headers=owner_headers)
        assert response.status_code == 200
        assert response.get_json()["pagination"]["total"] == 2

    def test_users_are_admin_only(self, client, owner_headers, admin_headers):
        assert client.get("/api/v1/users", headers=owner_headers).status_code == 302
        assert client.get("/api/v1/users", headers=admin_headers).status_code == 200


class TestProducts:
    def url(self, site, suffix=""):
        return f"/api/v1/sites/{site}/products{suffix}"

    def create(self, client, headers, site, **overrides):
        payload = {"title": "Corsair K70", "slug": "corsair-k70", "product_type": "gaming_keyboard"}
        payload.update(overrides)
        return client.post(self.url(site), json=payload, headers=headers)

    def test_list_is_paginated(self, client, admin_headers, gaming_id):
        body = client.get(self.url(gaming_id), query_string={"per_page": 1}, headers=admin_headers).get_json()
        assert len(body["items"]) == 1
        page = body["pagination"]
        assert (page["page"], page["per_page"], page["total"], page["total_pages"]) == (1, 1, 2, 2)

    def test_create_draft(self, client, admin_headers, gaming_id):
        response = self.create(client, admin_headers, gaming_id)
        body = response.get_json()
        assert response.status_code == 201
        assert body["status"] == "DRAFT"
        assert body["published_at"] is None

    def test_create_published_stamps_date(self, client, admin_headers, gaming_id):
        body = self.create(client, admin_headers, gaming_id, status="PUBLISHED").get_json()
        assert body["published_at"] is not None

    def test_validation_errors_list_fields(self, client, admin_headers, gaming_id):
        response = client.post(self.url(gaming_id), json={"slug": "Not A Slug"}, headers=admin_headers)
        body = response.get_json()
        assert response.status_code == 400
        assert body["error"] == "ValidationError"
        assert {"title", "slug", "product_type"} <= set(body["fields"])

    def test_slug_conflict(self, client, admin_headers, gaming_id):
        response = self.create(client, admin_headers, gaming_id, slug="razer-blade-15")
        assert response.status_code == 409

    def test_same_slug_allowed_on_another_site(self, client, admin_headers, beauty_id):
        assert self.create(client, admin_headers, beauty_id, slug="razer-blade-15").status_code == 201

    def test_category_from_other_site_is_rejected(self, client, admin_headers, gaming_id, seeded):
        foreign = Category.query.filter_by(site_id=seeded["beauty"].id, slug="cleansers").one()
        response = self.create(client, admin_headers, gaming_id, category_ids=[foreign.id])
        assert response.status_code == 400
        assert "category_ids" in response.get_json()["fields"]

    def test_duplicate_twice(self, client, admin_headers, gaming_id):
        product_id = self.create(client, admin_headers, gaming_id, status="PUBLISHED", is_featured=True).get_json()["id"]

        first = client.post(self.url(gaming_id, f"/{product_id}/duplicate"), headers=admin_headers)
        second = client.post(self.url(gaming_id, f"/{product_id}/duplicate"), headers=admin_headers)
        assert first.status_code == second.status_code == 201

        copy = first.get_json()
        assert copy["title"] == "Corsair K70 (Copy)"
        assert copy["slug"] == "corsair-k70-copy"
        assert copy["status"] == "DRAFT"
        assert copy["is_featured"] is False
        assert second.get_json()["slug"] == "corsair-k70-copy-1"

    def test_archived_cannot_be_published(self, client, admin_headers, gaming_id):
        product_id = self.create(client, admin_headers, gaming_id, status="PUBLISHED").get_json()["id"]
        url = self.url(gaming_id, f"/{product_id}")

        assert client.patch(url, json={"status": "ARCHIVED"}, headers=admin_headers).status_code == 200
        response = client.patch(url, json={"status": "PUBLISHED"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "IllegalTransition"

    def test_update_and_delete(self, client, admin_headers, gaming_id):
        product_id = self.create(client, admin_headers, gaming_id).get_json()["id"]
        url = self.url(gaming_id, f"/{product_id}")

        updated = client.put(url, json={"rating": 4.4, "metadata": {"pros": ["Quiet"]}}, headers=admin_headers)
        assert updated.get_json()["rating"] == 4.4
        assert updated.get_json()["metadata"] == {"pros": ["Quiet"]}

        assert client.delete(url, headers=admin_headers).status_code == 200
        assert client.get(url, headers=admin_headers).status_code == 404

    def test_primary_category_can_change_alone(self, client, admin_headers, gaming_id):
        laptops = Category.query.filter_by(site_id=gaming_id, slug="laptops").one().id
        mice = Category.query.filter_by(site_id=gaming_id, slug="mice").one().id
        product_id = self.create(
            client, admin_headers, gaming_id, category_ids=[laptops, mice], primary_category_id=laptops
        ).get_json()["id"]
        url = self.url(gaming_id, f"/{product_id}")

        body = client.patch(url, json={"primary_category_id": mice}, headers=admin_headers).get_json()
        assert body["primary_category_id"] == mice
        assert set(body["category_ids"]) == {laptops, mice}

        cleared = client.patch(url, json={"primary_category_id": None}, headers=admin_headers).get_json()
        assert cleared["primary_category_id"] is None

    def test_primary_category_must_be_linked(self, client, admin_headers, gaming_id):
        laptops = Category.query.filter_by(site_id=gaming_id, slug="laptops").one().id
        mice = Category.query.filter_by(site_id=gaming_id, slug="mice").one().id
        product_id = self.create(client, admin_headers, gaming_id, category_ids=[laptops]).get_json()["id"]

        response = client.patch(
            self.url(gaming_id, f"/{product_id}"), json={"primary_category_id": mice}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "primary_category_id" in response.get_json()["fields"]

    def test_product_of_other_site_is_not_found(self, client, admin_headers, gaming_id, beauty_id):
        product_id = self.create(client, admin_headers, beauty_id).get_json()["id"]
        assert client.get(self.url(gaming_id, f"/{product_id}"), headers=admin_headers).status_code == 404


class TestCategories:
    def test_delete_reparents_children(self, client, admin_headers, gaming_id):
        base = f"/api/v1/sites/{gaming_id}/categories"
        root = client.post(base, json={"name": "Gear", "slug": "gear", "category_type": "gaming"}, headers=admin_headers)
        root_id = root.get_json()["id"]
        middle_id = client.post(base, json={
            "name": "Audio", "slug": "audio", "category_type": "gaming", "parent_id": root_id,
        }, headers=admin_headers).get_json()["id"]
        leaf_id = client.post(base, json={
            "name": "Headsets", "slug": "headsets", "category_type": "gaming", "parent_id": middle_id,
        }, headers=admin_headers).get_json()["id"]

        assert client.delete(f"{base}/{middle_id}", headers=admin_headers).status_code == 200
        leaf = client.get(f"{base}/{leaf_id}", headers=admin_headers).get_json()
        assert leaf["parent_id"] == root_id

    def test_article_categories_have_no_type(self, client, admin_headers, gaming_id):
        response = client.post(
            f"/api/v1/sites/{gaming_id}/article-categories",
            json={"name": "News", "slug": "news"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert "category_type" not in response.get_json()


class TestMedia:
    def test_upload_list_delete(self, client, admin_headers, gaming_id, app):
        base = f"/api/v1/sites/{gaming_id}/media"
        response = client.post(
            base,
            data={"files": (io.BytesIO(b"\x89PNG fake"), "photo.png"), "alt_text": "A photo"},
            content_type="multipart/form-data",
            headers=admin_headers,
        )
        assert response.status_code == 201
        item = response.get_json()["items"][0]
        assert item["url"].startswith("/uploads/demo-gaming/")

        assert client.get(base, headers=admin_headers).get_json()["pagination"]["total"] == 1
        assert client.delete(f"{base}/{item['id']}", headers=admin_headers).status_code == 200
        assert Media.query.count() == 0

    def test_rejects_unknown_extension(self, client, admin_headers, gaming_id):
        response = client.post(
            f"/api/v1/sites/{gaming_id}/media",
            data={"files": (io.BytesIO(b"#!/bin/sh"), "run.sh")},
            content_type="multipart/form-data",
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert "file" in response.get_json()["fields"]


def test_openapi_document_is_served(client):
    response = client.get("/openapi/admin.yaml")
    assert response.status_code == 200
    assert b"openapi: 3.0.3" in response.data
