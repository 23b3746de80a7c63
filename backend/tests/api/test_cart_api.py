from __future__ import annotations

import uuid

from tests.factories.catalog import ProductFactory


def test_resolves_lines_in_request_order(client):
    lamp, desk = ProductFactory(title="Lamp"), ProductFactory(title="Desk")

    response = client.post(
        "/api/v1/cart", json=[{"id": desk.id, "qty": 1}, {"id": lamp.id, "qty": 3}]
    )

    assert response.status_code == 200
    lines = response.get_json()
    assert [(line["product"]["title"], line["qty"]) for line in lines] == [("Desk", 1), ("Lamp", 3)]
    assert lines[0]["product"]["id"] == desk.id


def test_empty_cart(client):
    response = client.post("/api/v1/cart", json=[])
    assert response.status_code == 200
    assert response.get_json() == []


def test_unknown_product(client):
    response = client.post("/api/v1/cart", json=[{"id": str(uuid.uuid4()), "qty": 1}])
    assert response.status_code == 404


def test_malformed_product_id(client):
    response = client.post("/api/v1/cart", json=[{"id": "lamp", "qty": 1}])
    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_id"


def test_quantity_must_be_positive(client):
    product = ProductFactory()
    response = client.post("/api/v1/cart", json=[{"id": product.id, "qty": 0}])
    assert response.status_code == 422


def test_body_must_be_a_list(client):
    product = ProductFactory()
    response = client.post("/api/v1/cart", json={"id": product.id, "qty": 1})
    assert response.status_code == 422
