from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.catalog import CategoryFactory, ProductFactory, SlideFactory
from tests.helpers.auth import bearer, make_claims

RESOURCES = [
    pytest.param("categories", {"title": "Lamps", "slug": "lamps"}, id="categories"),
    pytest.param(
        "products", {"title": "Desk lamp", "slug": "desk-lamp", "price": 19.99}, id="products"
    ),
    pytest.param("brands", {"title": "Acme", "slug": "acme"}, id="brands"),
    pytest.param(
        "article-categories", {"title": "Guides", "slug": "guides"}, id="article-categories"
    ),
    pytest.param("articles", {"title": "How to", "slug": "how-to"}, id="articles"),
    pytest.param("slides", {"title": "Summer sale", "link": "/sale"}, id="slides"),
]


@pytest.mark.parametrize(("resource", "payload"), RESOURCES)
class TestCatalogEndpoints:
    def url(self, resource, suffix=""):
        return f"/api/v1/{resource}{suffix}"

    def test_crud_round_trip(self, client, admin_headers, resource, payload):
        created = client.post(self.url(resource), json=payload, headers=admin_headers)
        assert created.status_code == 201
        body = created.get_json()
        assert body["title"] == payload["title"]
        assert body["date_created"] == body["date_updated"]
        item_url = self.url(resource, f"/{body['id']}")

        listed = client.get(self.url(resource))
        assert [i["id"] for i in listed.get_json()] == [body["id"]]

        assert client.get(item_url).get_json() == body

        patched = client.patch(item_url, json={"title": "Renamed"}, headers=admin_headers)
        assert patched.status_code == 204
        assert patched.data == b""
        after = client.get(item_url).get_json()
        assert after["title"] == "Renamed"
        assert after["date_created"] == body["date_created"]

        assert client.delete(item_url, headers=admin_headers).status_code == 204
        assert client.get(item_url).status_code == 404

    def test_writes_require_a_token(self, client, resource, payload):
        response = client.post(self.url(resource), json=payload)
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.mimetype == "application/problem+json"

    def test_writes_require_admin(self, client, user_headers, resource, payload):
        response = client.post(self.url(resource), json=payload, headers=user_headers)
        assert response.status_code == 403
        assert response.get_json()["code"] == "forbidden"
        assert client.get(self.url(resource)).get_json() == []

    def test_malformed_id(self, client, resource, payload):
        response = client.get(self.url(resource, "/not-a-uuid"))
        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_id"
        assert response.get_json()["detail"] == "ID is not in its proper form"

    def test_unknown_id(self, client, resource, payload):
        assert client.get(self.url(resource, f"/{uuid.uuid4()}")).status_code == 404

    def test_update_unknown_id_is_not_found_even_for_users(
        self, client, user_headers, resource, payload
    ):
        response = client.put(
            self.url(resource, f"/{uuid.uuid4()}"), json={"title": "x"}, headers=user_headers
        )
        assert response.status_code == 404

    def test_delete_checks_role_first(self, client, user_headers, resource, payload):
        response = client.delete(self.url(resource, "/not-a-uuid"), headers=user_headers)
        assert response.status_code == 403

    def test_validation_errors(self, client, admin_headers, resource, payload):
        response = client.post(
            self.url(resource),
            json={**payload, "title": "", "colour": "red"},
            headers=admin_headers,
        )
        assert response.status_code == 422
        errors = response.get_json()["details"]["errors"]
        assert "title" in errors
        assert "colour" in errors


class TestSlugRoutes:
    def test_lookup_by_slug(self, client):
        category = CategoryFactory(slug="garden")
        response = client.get("/api/v1/categories/slug/garden")
        assert response.status_code == 200
        assert response.get_json()["id"] == category.id

    def test_unknown_slug(self, client):
        assert client.get("/api/v1/products/slug/missing").status_code == 404

    def test_slides_have_no_slug_route(self, client):
        SlideFactory()
        response = client.get("/api/v1/slides/slug/anything")
        assert response.status_code == 404
        assert response.get_json()["code"] == "not_found"


class TestProducts:
    def test_duplicate_slug_conflicts(self, client, admin_headers):
        ProductFactory(slug="taken")
        response = client.post(
            "/api/v1/products", json={"title": "Other", "slug": "taken"}, headers=admin_headers
        )
        assert response.status_code == 409

    def test_negative_price_rejected(self, client, admin_headers):
        response = client.post(
            "/api/v1/products",
            json={"title": "Free", "slug": "free", "price": -1},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_dangling_reference_rejected(self, client, admin_headers):
        response = client.post(
            "/api/v1/products",
            json={"title": "Orphan", "slug": "orphan", "brand_id": str(uuid.uuid4())},
            headers=admin_headers,
        )
        assert response.status_code == 409

    def test_reference_must_be_a_uuid(self, client, admin_headers):
        response = client.post(
            "/api/v1/products",
            json={"title": "Lamp", "slug": "lamp", "category_id": "lighting"},
            headers=admin_headers,
        )
        assert response.status_code == 422


class TestBearerTokens:
    def test_expired_token(self, app, client):
        stale = make_claims(roles=["ADMIN"], issued_at=datetime.now(UTC) - timedelta(hours=3))
        response = client.post(
            "/api/v1/brands", json={"title": "A", "slug": "a"}, headers=bearer(app, stale)
        )
        assert response.status_code == 401

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer not.a.jwt"])
    def test_bad_authorization_header(self, client, header):
        response = client.post(
            "/api/v1/brands", json={"title": "A", "slug": "a"}, headers={"Authorization": header}
        )
        assert response.status_code == 401

    def test_token_signed_with_unknown_kid(self, app, client, admin_claims):
        from shop.auth import TokenIssuer
        from shop.auth.keys import KeyStore, generate_private_key

        rogue = TokenIssuer(KeyStore({"rogue": generate_private_key()})).generate(
            "rogue", admin_claims
        )
        response = client.post(
            "/api/v1/brands",
            json={"title": "A", "slug": "a"},
            headers={"Authorization": f"Bearer {rogue}"},
        )
        assert response.status_code == 401


def test_storage_failure_is_a_generic_500(client, monkeypatch):
    from shop.services import ProductService, StorageError

    def failing_query(self, trace_id):
        raise StorageError("product.query", {"table": "products"})

    monkeypatch.setattr(ProductService, "query", failing_query)

    response = client.get("/api/v1/products")

    assert response.status_code == 500
    body = response.get_json()
    assert body["code"] == "storage_error"
    assert "products" not in body["detail"]
