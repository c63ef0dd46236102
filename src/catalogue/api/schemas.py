"""Pydantic response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel

from catalogue.catalog import ProductPage
from catalogue.product.product import Category, Product


class ProductResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "1",
                    "name": "Cozy Winter Sweater",
                    "description": "Perfect for chilly holiday evenings.",
                    "price": 89.99,
                    "original_price": 129.99,
                    "image": "https://images.unsplash.com/photo-1551028719-00167b16eac5",
                    "category": "clothing",
                    "stock": 25,
                    "featured": True,
                    "tags": ["winter", "sweater", "cozy", "sale"],
                    "in_stock": True,
                    "on_sale": True,
                }
            ]
        }
    }

    id: str
    name: str
    description: str
    price: float
    original_price: float | None = None
    image: str
    category: str
    stock: int
    featured: bool
    tags: list[str]
    in_stock: bool
    on_sale: bool

    @classmethod
    def from_product(cls, product: Product) -> ProductResponse:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            original_price=float(product.original_price) if product.original_price is not None else None,
            image=product.image,
            category=product.category,
            stock=product.stock,
            featured=product.featured,
            tags=list(product.tags),
            in_stock=product.in_stock,
            on_sale=product.on_sale,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int
    count: int
    offset: int
    has_more: bool

    @classmethod
    def from_page(cls, page: ProductPage) -> ProductListResponse:
        return cls(
            products=[ProductResponse.from_product(product) for product in page.products],
            total=page.total,
            count=page.count,
            offset=page.offset,
            has_more=page.has_more,
        )


class CategoryResponse(BaseModel):
    id: str
    name: str
    count: int

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(id=category.id, name=category.name, count=category.count)
