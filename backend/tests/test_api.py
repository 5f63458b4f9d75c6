"""
HTTP API tests: the terminal driven through the Flask test client.
"""

import pytest

from posgo.constants import SEED_PRODUCTS


def _start_demo(client):
    response = client.post("/api/auth/demo")
    assert response.status_code == 200
    return response.get_json()


def test_health_reports_both_stores(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "healthy"
    assert body["mode"] == "demo"
    assert body["checks"]["local"]["status"] == "healthy"


def test_session_required(client):
    assert client.get("/api/products").status_code == 401
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/shifts/open", json={"startAmount": 10}).status_code == 401


def test_demo_session_serves_seed_catalog(client):
    body = _start_demo(client)
    assert body["mode"] == "demo"
    assert body["user"]["email"].endswith("@demo.posgo")

    products = client.get("/api/products").get_json()["items"]
    assert len(products) == len(SEED_PRODUCTS)

    drinks = client.get("/api/products?category=Bebidas").get_json()["items"]
    assert {p["category"] for p in drinks} == {"Bebidas"}

    found = client.get("/api/products?q=oreo").get_json()["items"]
    assert [p["id"] for p in found] == ["8"]


def test_sale_flow_through_a_shift(client):
    _start_demo(client)

    assert client.post("/api/cart/items", json={"productId": "missing"}).status_code == 404
    client.post("/api/cart/items", json={"productId": "1"})
    client.post("/api/cart/items", json={"productId": "1"})
    cart = client.get("/api/cart").get_json()
    assert cart["items"][0]["quantity"] == 2
    assert cart["totals"]["total"] == pytest.approx(7.0)

    response = client.post("/api/cart/checkout", json={"paymentMethod": "cash"})
    assert response.status_code == 409

    assert client.post("/api/shifts/open", json={"startAmount": 50}).status_code == 201
    assert client.post("/api/shifts/open", json={"startAmount": 50}).status_code == 409
    assert client.post("/api/shifts/movements", json={"type": "OUT", "amount": 2}).status_code == 201

    response = client.post("/api/cart/checkout", json={"paymentMethod": "cash"})
    assert response.status_code == 201
    assert response.get_json()["total"] == pytest.approx(7.0)
    assert client.get("/api/cart").get_json()["items"] == []

    inca = next(p for p in client.get("/api/products").get_json()["items"] if p["id"] == "1")
    assert inca["stock"] == 43

    report = client.post("/api/shifts/close", json={"endAmount": 55}).get_json()
    assert report["summary"]["expectedCash"] == pytest.approx(55.0)
    assert report["summary"]["difference"] == pytest.approx(0.0)
    assert report["summary"]["transactionCount"] == 1

    assert client.get("/api/shifts").get_json()["active"] is None
    assert len(client.get("/api/transactions").get_json()["items"]) == 1


def test_cart_line_edits(client):
    _start_demo(client)
    client.post("/api/cart/items", json={"productId": "17", "variantId": "v2"})

    response = client.patch("/api/cart/items/17", json={"delta": 2, "variantId": "v2"})
    assert response.get_json()["items"][0]["quantity"] == 3

    response = client.patch("/api/cart/items/17/discount", json={"discount": -1, "variantId": "v2"})
    assert response.status_code == 400

    assert client.delete("/api/cart/items/17").status_code == 404
    assert client.delete("/api/cart/items/17?variantId=v2").get_json()["items"] == []


def test_register_login_and_store_isolation(client):
    response = client.post("/api/auth/register", json={
        "email": "owner@bodega.pe",
        "password": "secret123",
        "name": "Owner",
        "storeName": "Bodega Central",
    })
    assert response.status_code == 201
    assert response.get_json()["mode"] == "store"

    assert client.get("/api/products").get_json()["items"] == []
    created = client.post("/api/products", json={"name": "Agua", "price": 2.5, "stock": 10})
    assert created.status_code == 201

    client.post("/api/auth/logout")
    assert client.get("/api/auth/session").get_json()["user"] is None

    bad = client.post("/api/auth/login", json={"email": "owner@bodega.pe", "password": "wrong1234"})
    assert bad.status_code == 401

    response = client.post("/api/auth/login", json={"email": "owner@bodega.pe", "password": "secret123"})
    assert response.status_code == 200
    assert [p["name"] for p in client.get("/api/products").get_json()["items"]] == ["Agua"]


def test_register_rejects_weak_password_and_demo_domain(client):
    weak = client.post("/api/auth/register", json={
        "email": "a@b.pe", "password": "short", "name": "A", "storeName": "S",
    })
    assert weak.status_code == 400

    demo = client.post("/api/auth/register", json={
        "email": "x@demo.posgo", "password": "secret123", "name": "A", "storeName": "S",
    })
    assert demo.status_code == 400


def test_update_product_404_for_unknown_id(client):
    _start_demo(client)
    response = client.put("/api/products/nope", json={"name": "X", "price": 1})
    assert response.status_code == 404


def test_settings_partial_update(client):
    _start_demo(client)

    response = client.put("/api/settings", json={"name": "Bodega Rosa", "taxRate": 0.1})
    assert response.status_code == 200
    body = client.get("/api/settings").get_json()
    assert body["name"] == "Bodega Rosa"
    assert body["taxRate"] == 0.1
    assert body["pricesIncludeTax"] is True

    assert client.put("/api/settings", json={"taxRate": 18}).status_code == 400


def test_purchase_increases_stock(client):
    _start_demo(client)
    supplier = client.post("/api/suppliers", json={"name": "Distribuidora Lima"}).get_json()

    response = client.post("/api/purchases", json={
        "supplierId": supplier["id"],
        "items": [
            {"productId": "3", "quantity": 12, "cost": 1.5},
            {"productId": "17", "variantId": "v3", "quantity": 5, "cost": 20},
        ],
    })
    assert response.status_code == 201

    products = {p["id"]: p for p in client.get("/api/products").get_json()["items"]}
    assert products["3"]["stock"] == 24 + 12
    assert products["17"]["stock"] == 35

    missing_variant = client.post("/api/purchases", json={"items": [{"productId": "17", "quantity": 1}]})
    assert missing_variant.status_code == 400


def test_template_edit_by_store_user_is_local_only(client):
    client.post("/api/auth/register", json={
        "email": "owner@bodega.pe", "password": "secret123", "name": "Owner", "storeName": "Bodega",
    })

    response = client.post("/api/admin/template/products", json={"name": "Nuevo", "price": 3, "stock": 5})

    assert response.status_code == 200
    sync = response.get_json()["sync"]
    assert sync["status"] == "LOCAL_ONLY"
    assert sync["permissionDenied"] is True


def test_leads_public_capture_and_admin_listing(client, superadmin_profile):
    response = client.post("/api/leads", json={"name": "Rosa", "businessName": "Bodega Rosa", "phone": "999111222"})
    assert response.status_code == 201
    assert client.post("/api/leads", json={"name": "Rosa"}).status_code == 400

    assert client.get("/api/admin/leads").status_code == 401
    _start_demo(client)
    assert client.get("/api/admin/leads").status_code == 403

    client.post("/api/auth/login", json={"email": "root@posgo.pe", "password": "secret123"})
    leads = client.get("/api/admin/leads").get_json()["items"]
    assert [lead["phone"] for lead in leads] == ["999111222"]
    assert client.delete(f"/api/admin/leads/{leads[0]['id']}").status_code == 200
    assert client.get("/api/admin/leads").get_json()["items"] == []


def test_variant_product_needs_variant_to_enter_cart(client):
    _start_demo(client)

    response = client.post("/api/cart/items", json={"productId": "17"})
    assert response.status_code == 400
    assert client.post("/api/cart/items", json={"productId": "17", "variantId": "nope"}).status_code == 400
    assert client.get("/api/cart").get_json()["items"] == []

    client.post("/api/shifts/open", json={"startAmount": 0})
    client.post("/api/cart/items", json={"productId": "17", "variantId": "v1"})
    client.patch("/api/cart/items/17", json={"delta": 2, "variantId": "v1"})
    assert client.post("/api/cart/checkout", json={"paymentMethod": "cash"}).status_code == 201

    panetton = next(p for p in client.get("/api/products").get_json()["items"] if p["id"] == "17")
    assert panetton["stock"] == 30 - 3


def test_packs_only_take_plain_components(client):
    _start_demo(client)

    candidates = [p["id"] for p in client.get("/api/products/pack-candidates").get_json()["items"]]
    assert "17" not in candidates
    assert "1" in candidates

    rejected = client.post("/api/products", json={
        "name": "Regalo", "price": 60, "isPack": True,
        "packItems": [{"productId": "17", "quantity": 2}],
    })
    assert rejected.status_code == 400

    created = client.post("/api/products", json={
        "name": "Combo", "price": 5, "isPack": True,
        "packItems": [{"productId": "1", "quantity": 2}],
    }).get_json()
    client.post("/api/shifts/open", json={"startAmount": 0})
    client.post("/api/cart/items", json={"productId": created["id"]})
    assert client.post("/api/cart/checkout", json={"paymentMethod": "cash"}).status_code == 201

    inca = next(p for p in client.get("/api/products").get_json()["items"] if p["id"] == "1")
    assert inca["stock"] == 45 - 2
