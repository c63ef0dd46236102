"""Integration tests for Product and Category API endpoints via TestClient."""

import pytest
from catalogue.api import category_router, product_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from shared.exception_handlers import register_exception_handlers


@pytest.fixture()
def client(storefront):
    app = FastAPI()
    app.state.storefront = storefront
    register_exception_handlers(app)
    app.include_router(product_router)
    app.include_router(category_router)
    return TestClient(app)


class TestListProducts:
    def test_list_all(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 12
        assert len(data["products"]) == 12

    def test_filter_by_category(self, client):
        response = client.get("/products", params={"category": "food"})
        assert [p["id"] for p in response.json()["products"]] == ["5", "9", "11"]

    def test_featured_and_category_combine(self, client):
        response = client.get("/products", params={"category": "food", "featured": "true"})
        assert [p["id"] for p in response.json()["products"]] == ["5"]

    def test_search(self, client):
        response = client.get("/products", params={"search": "wreath"})
        assert [p["id"] for p in response.json()["products"]] == ["6"]

    def test_pagination(self, client):
        response = client.get("/products", params={"limit": 4, "offset": 4})
        data = response.json()
        assert [p["id"] for p in data["products"]] == ["5", "6", "7", "8"]
        assert data["has_more"] is True

    def test_limit_must_be_positive(self, client):
        response = client.get("/products", params={"limit": 0})
        assert response.status_code == 422


class TestProductDetail:
    def test_get_product(self, client):
        response = client.get("/products/1")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Cozy Winter Sweater"
        assert data["price"] == 89.99
        assert data["stock"] == 25
        assert data["on_sale"] is True

    def test_unknown_product_is_404(self, client):
        response = client.get("/products/nope")
        assert response.status_code == 404
        assert response.json()["code"] == "product_not_found"

    def test_featured_products(self, client):
        response = client.get("/products/featured")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["1", "2", "5"]


class TestCategories:
    def test_list_categories(self, client):
        response = client.get("/categories")
        assert response.status_code == 200
        categories = response.json()
        assert categories[0] == {"id": "all", "name": "All Products", "count": 12}
        assert {c["id"] for c in categories} >= {"clothing", "decorations", "food"}
