from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import VALID_FORM


def _add(client: TestClient, headers, **body):
    return client.post("/api/cart/items", json=body, headers=headers)


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cart_requires_known_session(client: TestClient) -> None:
    assert client.get("/api/cart").status_code == 400
    assert client.get("/api/cart", headers={"X-Session-Id": "nope"}).status_code == 404


def test_products_endpoints(client: TestClient) -> None:
    listing = client.get("/api/products", params={"category": "fashion"}).json()
    assert listing["total"] >= 1
    assert all(p["category"] == "fashion" for p in listing["products"])

    assert client.get("/api/products/categories").json() == ["fashion", "electronics"]
    assert client.get("/api/products/fashion-2").json()["name"] == "Minimal Wool Sweater"
    assert client.get("/api/products/missing").status_code == 404
    assert len(client.get("/api/products/cart-hash").json()["hash"]) == 64


def test_add_merge_update_remove_through_api(client: TestClient, session_headers) -> None:
    response = _add(client, session_headers, product_id="fashion-1", variant_id="fashion-1-white-m")
    assert response.status_code == 200
    cart = response.json()["cart"]
    assert float(cart["total"]) == 89.0

    cart = _add(client, session_headers, product_id="fashion-1", variant_id="fashion-1-white-m").json()["cart"]
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 2
    assert float(cart["total"]) == 178.0

    body = _add(client, session_headers, product_id="fashion-2").json()
    assert [i["id"] for i in body["cart"]["items"]] == ["fashion-1-white-m", "fashion-2"]
    assert body["item_count"] == 3
    assert float(body["summary"]["shipping"]) == 0.0
    assert float(body["summary"]["total"]) == 327.0

    body = client.put("/api/cart/items/fashion-2", json={"quantity": 0}, headers=session_headers).json()
    assert [i["id"] for i in body["cart"]["items"]] == ["fashion-1-white-m"]
    assert float(body["summary"]["shipping"]) == 25.0

    body = client.delete("/api/cart/items/not-there", headers=session_headers).json()
    assert float(body["cart"]["total"]) == 178.0

    body = client.delete("/api/cart/items/fashion-1-white-m", headers=session_headers).json()
    assert body["cart"]["items"] == []
    assert float(body["cart"]["total"]) == 0.0


def test_add_rejects_unknown_product_and_variant(client: TestClient, session_headers) -> None:
    assert _add(client, session_headers, product_id="missing").status_code == 404
    assert _add(client, session_headers, product_id="fashion-1", variant_id="nope").status_code == 404
    assert _add(client, session_headers, product_id="fashion-1").status_code == 400
    assert _add(client, session_headers, product_id="fashion-2", quantity=0).status_code == 422


def test_toggle_and_close(client: TestClient, session_headers) -> None:
    assert client.post("/api/cart/toggle", headers=session_headers).json()["cart"]["is_open"] is True
    assert client.post("/api/cart/toggle", headers=session_headers).json()["cart"]["is_open"] is False
    client.post("/api/cart/toggle", headers=session_headers)
    assert client.post("/api/cart/close", headers=session_headers).json()["cart"]["is_open"] is False


def test_validate_hash_clears_stale_cart(client: TestClient, session_headers) -> None:
    client.post("/api/cart/validate-hash", json={"hash": "old"}, headers=session_headers)
    _add(client, session_headers, product_id="fashion-2")

    body = client.post("/api/cart/validate-hash", headers=session_headers).json()

    assert body["cart"]["items"] == []
    assert "cleared" in body["message"]


def test_checkout_needs_items(client: TestClient, session_headers) -> None:
    assert client.post("/api/checkout", headers=session_headers).status_code == 400
    assert client.get("/api/checkout", headers=session_headers).status_code == 404


def test_checkout_validation_errors(client: TestClient, session_headers) -> None:
    _add(client, session_headers, product_id="fashion-2")
    client.post("/api/checkout", headers=session_headers)
    client.patch(
        "/api/checkout/form",
        json={"full_name": "Asha Rao", "email": "asha@", "address": "x", "zip_code": "1"},
        headers=session_headers,
    )

    body = client.post("/api/checkout/submit", headers=session_headers).json()

    assert body["success"] is False
    assert body["state"] == "idle"
    assert set(body["errors"]) == {"email", "phone"}

    state = client.patch("/api/checkout/form", json={"email": "asha@example.com"}, headers=session_headers).json()
    assert set(state["errors"]) == {"phone"}


def test_patch_can_clear_upi_id(client: TestClient, session_headers) -> None:
    _add(client, session_headers, product_id="fashion-2")
    client.post("/api/checkout", headers=session_headers)
    client.patch(
        "/api/checkout/form",
        json={**VALID_FORM, "payment_method": "upi", "upi_id": "asha@okbank"},
        headers=session_headers,
    )

    state = client.patch(
        "/api/checkout/form",
        json={"payment_method": "cod", "upi_id": None},
        headers=session_headers,
    ).json()

    assert state["form"]["payment_method"] == "cod"
    assert state["form"]["upi_id"] is None

    state = client.patch("/api/checkout/form", json={"phone": None}, headers=session_headers).json()
    assert state["form"]["phone"] == ""


def test_unknown_form_field_rejected(client: TestClient, session_headers) -> None:
    _add(client, session_headers, product_id="fashion-2")
    client.post("/api/checkout", headers=session_headers)

    response = client.patch("/api/checkout/form", json={"coupon": "FREE"}, headers=session_headers)

    assert response.status_code == 422


def test_checkout_happy_path(client: TestClient, session_headers) -> None:
    _add(client, session_headers, product_id="electronics-1", variant_id="electronics-1-note14-clear", quantity=2)
    client.post("/api/cart/toggle", headers=session_headers)

    started = client.post(
        "/api/checkout",
        json={"profile": {"full_name": "Asha Rao", "email": "asha@example.com"}},
        headers=session_headers,
    ).json()
    assert started["form"]["full_name"] == "Asha Rao"
    assert started["state"] == "idle"
    assert started["can_submit"] is True

    client.patch("/api/checkout/form", json=VALID_FORM, headers=session_headers)
    summary = client.get("/api/checkout/summary", headers=session_headers).json()
    assert float(summary["subtotal"]) == 50.0
    assert float(summary["shipping"]) == 25.0
    assert float(summary["total"]) == 75.0
    assert float(summary["amount_to_free_shipping"]) == 150.0

    body = client.post("/api/checkout/submit", headers=session_headers).json()

    assert body["success"] is True
    assert body["state"] == "succeeded"
    assert body["redirect_to"] == "/"
    assert float(body["order"]["total"]) == 75.0
    assert body["order"]["items"][0]["variant_id"] == "electronics-1-note14-clear"

    cart = client.get("/api/cart", headers=session_headers).json()["cart"]
    assert cart["items"] == []
    assert cart["is_open"] is False

    order_id = body["order"]["order_id"]
    assert client.get(f"/api/checkout/orders/{order_id}").json()["order_id"] == order_id
    assert any(o["order_id"] == order_id for o in client.get("/api/checkout/orders").json())

    again = client.post("/api/checkout/submit", headers=session_headers)
    assert again.status_code == 409


def test_unknown_order(client: TestClient) -> None:
    assert client.get("/api/checkout/orders/ORD-NOPE").status_code == 404


def test_delete_session(client: TestClient, session_headers) -> None:
    session_id = session_headers["X-Session-Id"]
    assert client.delete(f"/api/session/{session_id}").status_code == 200
    assert client.get("/api/cart", headers=session_headers).status_code == 404
