"""Integration tests for Cart and Coupon API endpoints via TestClient."""

import pytest
from fastapi.testclient import TestClient
from ordering.cart.cart import ShoppingCart
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from app import create_app


@pytest.fixture()
def client(storefront):
    return TestClient(create_app(storefront=storefront))


def _add_item(client, session_id="sess-001", product_id="1", quantity=1):
    """Helper: POST /carts/{session_id}/items."""
    response = client.post(
        f"/carts/{session_id}/items",
        json={"product_id": product_id, "quantity": quantity},
    )
    assert response.status_code == 200
    return response


class TestGetCart:
    def test_new_session_has_empty_cart(self, client):
        response = client.get("/carts/sess-001")
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["item_count"] == 0
        assert data["pricing"]["shipping"] == 9.99

    def test_reading_creates_nothing(self, client, storefront):
        client.get("/carts/sess-unknown")
        assert "sess-unknown" not in storefront.sessions
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(ShoppingCart).get("sess-unknown")


class TestCartItemEndpoints:
    def test_add_item(self, client):
        data = _add_item(client, quantity=2).json()
        assert data["item_count"] == 2
        assert data["items"][0]["product_id"] == "1"
        assert data["items"][0]["line_total"] == 179.98

    def test_add_unknown_product(self, client):
        response = client.post("/carts/sess-001/items", json={"product_id": "999", "quantity": 1})
        assert response.status_code == 404
        assert response.json()["code"] == "product_not_found"

    def test_add_zero_quantity(self, client):
        response = client.post("/carts/sess-001/items", json={"product_id": "1", "quantity": 0})
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "quantity_not_positive"
        assert "quantity" in body["errors"]

    def test_add_more_than_stock(self, client):
        response = client.post("/carts/sess-001/items", json={"product_id": "8", "quantity": 16})
        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "quantity_exceeds_stock"
        assert body["message"] == "Only 15 items available"

    def test_update_quantity(self, client):
        _add_item(client)
        response = client.put("/carts/sess-001/items/1", json={"quantity": 3})
        assert response.status_code == 200
        assert response.json()["item_count"] == 3

    def test_update_absent_entry(self, client):
        response = client.put("/carts/sess-001/items/1", json={"quantity": 3})
        assert response.status_code == 404
        assert response.json()["code"] == "cart_entry_not_found"

    def test_remove_item(self, client):
        _add_item(client)
        response = client.delete("/carts/sess-001/items/1")
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_clear_cart(self, client):
        _add_item(client, product_id="1")
        _add_item(client, product_id="2")
        response = client.delete("/carts/sess-001")
        assert response.status_code == 200
        assert response.json()["item_count"] == 0

    def test_close_session(self, client, storefront):
        _add_item(client)
        response = client.post("/carts/sess-001/close")
        assert response.status_code == 200
        assert response.json() == {"status": "closed"}
        assert "sess-001" not in storefront.sessions
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(ShoppingCart).get("sess-001")
        assert client.get("/carts/sess-001").json()["item_count"] == 0


class TestCartCouponEndpoints:
    def test_apply_coupon_prices_cart(self, client):
        _add_item(client)
        response = client.post("/carts/sess-001/coupon", json={"coupon_code": "HOLIDAY20"})
        assert response.status_code == 200
        pricing = response.json()["pricing"]
        assert pricing == {
            "subtotal": 89.99,
            "tax": 7.2,
            "shipping": 0.0,
            "discount": 18.0,
            "total": 79.19,
            "coupon_code": "HOLIDAY20",
            "carrier": None,
        }

    def test_invalid_coupon(self, client):
        _add_item(client)
        response = client.post("/carts/sess-001/coupon", json={"coupon_code": "EXPIRED"})
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "invalid_coupon"
        assert body["errors"] == {"coupon_code": ["Invalid or expired coupon code"]}

    def test_remove_coupon(self, client):
        _add_item(client)
        client.post("/carts/sess-001/coupon", json={"coupon_code": "WINTER10"})
        response = client.delete("/carts/sess-001/coupon")
        assert response.json()["coupon_code"] is None
        assert response.json()["pricing"]["discount"] == 0.0


class TestCouponEndpoints:
    def test_list_coupons(self, client):
        response = client.get("/coupons")
        assert response.status_code == 200
        assert [c["code"] for c in response.json()] == ["HOLIDAY20", "WINTER10", "FESTIVE25"]

    def test_validate(self, client):
        response = client.post("/coupons/validate", json={"coupon_code": "holiday20", "order_total": 89.99})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["coupon"]["code"] == "HOLIDAY20"
        assert data["discount"] == 18.0

    def test_validate_below_minimum(self, client):
        response = client.post("/coupons/validate", json={"coupon_code": "HOLIDAY20", "order_total": 40})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_coupon"
