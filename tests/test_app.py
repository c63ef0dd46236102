"""Integration tests for the assembled application."""

import pytest
from fastapi.testclient import TestClient

from app import create_app


@pytest.fixture()
def client(storefront):
    return TestClient(create_app(storefront=storefront))


class TestApplication:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["env"] == "test"
        assert data["products"] == 12
        assert data["sessions"] == 0
        assert data["orders"] == 0

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"x-request-id": "req-42"})
        assert response.headers["x-request-id"] == "req-42"

    def test_request_id_generated(self, client):
        assert client.get("/health").headers["x-request-id"]

    def test_every_router_is_mounted(self, client):
        paths = {route.path for route in client.app.routes}
        assert {"/products", "/categories", "/carts/{session_id}", "/coupons", "/checkout", "/orders/{order_id}"} <= paths
        assert "/payments/gateway/configure" in paths

    def test_health_counts_orders(self, client):
        client.post("/carts/sess-001/items", json={"product_id": "1", "quantity": 1})
        client.post(
            "/checkout",
            json={
                "session_id": "sess-001",
                "shipping_info": {
                    "first_name": "Noel",
                    "last_name": "Winters",
                    "email": "noel@example.com",
                    "address": "1 Snowflake Lane",
                    "city": "North Pole",
                    "state": "AK",
                    "zip_code": "99705",
                },
                "payment_info": {
                    "card_number": "4242 4242 4242 4242",
                    "expiry_month": "12",
                    "expiry_year": "2030",
                    "cvv": "123",
                    "name_on_card": "Noel Winters",
                },
            },
        )
        assert client.get("/health").json()["orders"] == 1
