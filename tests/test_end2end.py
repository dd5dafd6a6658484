import pytest
from jose import jwt

from b2b_app.core.config import settings
from b2b_app.core.security import create_session_token
from conftest import TEST_SHOP, add_customer, add_group, add_rule


def _signup_payload(email="buyer@northwind-traders.com"):
    return {
        "email": email,
        "first_name": "Sam",
        "last_name": "Okafor",
        "company_name": "Northwind Traders",
        "business_type": "retailer",
    }


def _price(client, email, quantity, price):
    resp = client.post(
        "/storefront/calculate-price",
        json={"customer_email": email, "product_id": 9001, "quantity": quantity, "original_price": price},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.order(1)
def test_admin_routes_need_session_token(client):
    assert client.get("/pricing-rules/").status_code == 401

    forged = jwt.encode({"dest": f"https://{TEST_SHOP}", "iss": f"https://{TEST_SHOP}/admin"}, "wrong-secret")
    resp = client.get("/customers/", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.order(2)
def test_token_for_mismatched_shop_is_rejected(client):
    token = create_session_token(TEST_SHOP)
    claims = jwt.get_unverified_claims(token)
    claims["iss"] = "https://other-shop.myshopify.com/admin"
    tampered = jwt.encode(claims, settings.SHOPIFY_API_SECRET, algorithm=settings.ALGORITHM)

    resp = client.get("/stats", headers={"Authorization": f"Bearer {tampered}"})
    assert resp.status_code == 401


@pytest.mark.order(3)
def test_signup_to_wholesale_pricing_flow(client, admin_headers):
    # public signup lands as pending; pending customers pay full price
    resp = client.post("/customers/signup", json=_signup_payload())
    assert resp.status_code == 200, resp.text
    customer = resp.json()
    assert customer["status"] == "pending"
    assert _price(client, "buyer@northwind-traders.com", 1, 50.0)["b2b_customer"] is False

    resp = client.post(
        "/groups/",
        json={"name": "Gold", "discount_percentage": 12.0, "minimum_order_value": 200.0, "payment_terms": "net30"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    group_id = resp.json()["id"]

    resp = client.put(f"/customers/{customer['id']}/group", json={"group_id": group_id}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["discount_percentage"] == 12.0
    assert resp.json()["status"] == "pending"

    resp = client.post(f"/customers/{customer['id']}/approve", headers=admin_headers)
    assert resp.json()["status"] == "approved"

    resp = client.post(
        "/pricing-rules/",
        json={"name": "Bulk 20", "type": "percentage", "value": 20, "min_quantity": 10},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    rule_id = resp.json()["id"]

    small = _price(client, "Buyer@Northwind-Traders.com", 5, 50.0)
    assert small["b2b_customer"] is True
    assert small["final_price"] == 44.0
    assert small["discount_amount"] == 6.0
    assert small["applied_rule"] == "Customer group discount"

    bulk = _price(client, "buyer@northwind-traders.com", 10, 50.0)
    assert bulk["final_price"] == 40.0
    assert bulk["applied_rule"] == "Bulk 20"

    resp = client.patch(f"/pricing-rules/{rule_id}/toggle", headers=admin_headers)
    assert resp.json() == {"id": rule_id, "active": False}
    assert _price(client, "buyer@northwind-traders.com", 10, 50.0)["final_price"] == 44.0

    # the group minimum was copied onto the customer
    resp = client.post(
        "/storefront/validate-cart",
        json={"customer_email": "buyer@northwind-traders.com", "total_amount": 150.0},
    )
    body = resp.json()
    assert body["valid"] is False
    assert body["is_b2b"] is True
    assert body["errors"] == ["Minimum order value is $200.00"]
    assert body["minimum_order_value"] == 200.0

    resp = client.post(
        "/storefront/validate-cart",
        json={"customer_email": "buyer@northwind-traders.com", "total_amount": 250.0},
    )
    assert resp.json()["valid"] is True


@pytest.mark.order(4)
def test_admin_price_preview_includes_customer(client, admin_headers, db):
    customer = add_customer(db, discount_percentage=10.0)

    resp = client.post(
        "/pricing-rules/calculate",
        json={"customer_email": customer.email, "quantity": 1, "original_price": 80},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["final_price"] == 72.0
    assert body["customer"]["id"] == customer.id
    assert body["customer"]["company_name"] == "Acme Supply"


@pytest.mark.order(5)
def test_storefront_price_for_guest(client):
    body = _price(client, None, None, 19.99)
    assert body == {
        "b2b_customer": False,
        "original_price": 19.99,
        "final_price": 19.99,
        "discount": 0.0,
        "discount_amount": 0.0,
        "applied_rule": None,
    }


@pytest.mark.order(6)
def test_bad_line_input_is_rejected(client, db):
    add_customer(db)

    resp = client.post(
        "/storefront/calculate-price",
        json={"customer_email": "buyer@acme-supply.com", "quantity": 1, "original_price": -5},
    )
    assert resp.status_code == 400
    assert "negative" in resp.json()["detail"]

    resp = client.post(
        "/storefront/calculate-price",
        json={"customer_email": "buyer@acme-supply.com", "quantity": 0, "original_price": 5},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Quantity must be positive"

    resp = client.post(
        "/storefront/calculate-price",
        json={"customer_email": "buyer@acme-supply.com", "quantity": 1, "original_price": "12.50"},
    )
    assert resp.status_code == 422

    resp = client.post(
        "/storefront/validate-cart",
        json={"customer_email": "buyer@acme-supply.com", "total_amount": -1},
    )
    assert resp.status_code == 400


@pytest.mark.order(7)
def test_malformed_stored_rule_surfaces_as_400(client, db):
    add_customer(db)
    add_rule(db, name="Broken", type="buy_x_get_y", value=5.0)

    resp = client.post(
        "/storefront/calculate-price",
        json={"customer_email": "buyer@acme-supply.com", "quantity": 1, "original_price": 10},
    )
    assert resp.status_code == 400


@pytest.mark.order(8)
def test_customer_status(client, db):
    add_customer(db, email="ok@acme-supply.com", discount_percentage=15.0)
    add_customer(db, email="wait@acme-supply.com", status="pending")

    approved = client.get("/storefront/customer-status", params={"email": "OK@acme-supply.com"}).json()
    assert approved["is_b2b"] is True
    assert approved["customer"]["discount_percentage"] == 15.0

    pending = client.get("/storefront/customer-status", params={"email": "wait@acme-supply.com"}).json()
    assert pending == {"is_b2b": False, "customer": None}


@pytest.mark.order(9)
def test_quote_request_and_response(client, admin_headers):
    resp = client.post(
        "/quotes/request",
        json={"customer_email": "walkin@walkin-shop.com", "products": [101, 102], "quantities": [500]},
    )
    assert resp.status_code == 422

    resp = client.post(
        "/quotes/request",
        json={"customer_email": "walkin@walkin-shop.com", "products": [101, 102], "quantities": [500, 20]},
    )
    assert resp.status_code == 200
    quote_id = resp.json()["id"]

    resp = client.post(
        f"/quotes/{quote_id}/respond",
        json={"quote_amount": 4200.0, "quote_notes": "Freight included"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "responded"
    assert body["responded_by"] == TEST_SHOP
    assert body["customer_id"] == 0

    resp = client.patch(f"/quotes/{quote_id}/status", json={"status": "lost"}, headers=admin_headers)
    assert resp.status_code == 422


@pytest.mark.order(10)
def test_order_approval_flow(client, admin_headers, db):
    add_customer(db, minimum_order_value=300.0)

    resp = client.post(
        "/orders/",
        json={"customer_email": "buyer@acme-supply.com", "total_amount": 120.0, "order_number": "#1042"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    recorded = resp.json()
    assert recorded["valid"] is False
    assert recorded["order"]["approval_status"] == "pending"
    order_id = recorded["order"]["id"]

    pending = client.get("/orders/pending", headers=admin_headers).json()
    assert [o["id"] for o in pending] == [order_id]

    resp = client.post(f"/orders/{order_id}/approve", headers=admin_headers)
    assert resp.json()["approval_status"] == "approved"
    assert resp.json()["approved_by"] == TEST_SHOP

    detail = client.get(f"/orders/{order_id}", headers=admin_headers).json()
    assert detail["company_name"] == "Acme Supply"

    resp = client.post(
        "/orders/",
        json={"customer_email": "stranger@unknown-buyer.com", "total_amount": 10.0},
        headers=admin_headers,
    )
    assert resp.status_code == 404


@pytest.mark.order(11)
def test_settings_global_minimum_applies_to_carts(client, admin_headers, db):
    add_customer(db)

    resp = client.post("/settings", json={"min_order_value": 75, "auto_approve_orders": True}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["min_order_value"] == 75.0
    assert resp.json()["auto_approve_orders"] is True

    body = client.post(
        "/storefront/validate-cart",
        json={"customer_email": "buyer@acme-supply.com", "total_amount": 50},
    ).json()
    assert body["errors"] == ["Minimum order value is $75.00"]

    # guests are never blocked
    guest = client.post("/storefront/validate-cart", json={"total_amount": 50}).json()
    assert guest == {
        "valid": True,
        "is_b2b": False,
        "errors": [],
        "minimum_order_value": None,
        "maximum_order_value": None,
    }


@pytest.mark.order(12)
def test_health_and_metrics(client, admin_headers):
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["db_ok"] is True

    _price(client, None, 1, 10.0)
    metrics = client.get("/metrics", headers=admin_headers).json()
    assert metrics["requests_count"] >= 1
    assert metrics["price_calculations"] >= 1


@pytest.mark.order(13)
def test_update_rejects_null_for_required_fields(client, admin_headers, db):
    rule = add_rule(db, name="Spring", value=12.0)
    group = add_group(db, name="Platinum", discount_percentage=18.0)

    for payload in ({"value": None}, {"name": None}, {"type": None}, {"active": None}):
        resp = client.put(f"/pricing-rules/{rule.id}", json=payload, headers=admin_headers)
        assert resp.status_code == 422, payload

    for payload in ({"name": None}, {"discount_percentage": None}):
        resp = client.put(f"/groups/{group.id}", json=payload, headers=admin_headers)
        assert resp.status_code == 422, payload

    # omitted fields stay as they were; nullable ones may still be cleared
    resp = client.put(
        f"/pricing-rules/{rule.id}",
        json={"priority": 3, "customer_group_id": None},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["name"] == "Spring"
    assert body["value"] == 12.0
    assert body["priority"] == 3

    resp = client.put(f"/groups/{group.id}", json={"maximum_order_value": None}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Platinum"
