"""Catalog: read-only queries over the static product list."""

from collections.abc import Iterable

from pydantic import BaseModel

from catalogue.product.data import CATEGORY_NAMES, PRODUCTS
from catalogue.product.product import Category, Product
from shared.exceptions import ProductNotFound

ALL_CATEGORIES = "all"


class ProductPage(BaseModel):
    products: list[Product]
    total: int
    count: int
    offset: int
    has_more: bool


class Catalog:
    """Lookup, filter and search over immutable products.

    Products keep their load order; every query returns them in that order.
    """

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = tuple(products)
        self._by_id = {product.id: product for product in self._products}
        if len(self._by_id) != len(self._products):
            raise ValueError("Product ids must be unique")

    @classmethod
    def load(cls) -> "Catalog":
        """Build the catalog from the seed data."""
        return cls(Product(**record) for record in PRODUCTS)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def find_by_id(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)

    def get(self, product_id: str) -> Product:
        product = self.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def filter_by_category(self, category: str) -> list[Product]:
        return [product for product in self._products if product.category == category]

    def filter_featured(self) -> list[Product]:
        return [product for product in self._products if product.featured]

    def search(self, term: str) -> list[Product]:
        return [product for product in self._products if product.matches(term)]

    def categories(self) -> list[Category]:
        """Known categories with their product counts, ``all`` first."""
        categories = []
        for category_id, name in CATEGORY_NAMES.items():
            if category_id == ALL_CATEGORIES:
                count = len(self._products)
            else:
                count = len(self.filter_by_category(category_id))
            categories.append(Category(id=category_id, name=name, count=count))
        return categories

    def browse(
        self,
        category: str | None = None,
        featured: bool = False,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> ProductPage:
        """Apply every given filter, then paginate."""
        matches = list(self._products)
        if category and category != ALL_CATEGORIES:
            matches = [product for product in matches if product.category == category]
        if featured:
            matches = [product for product in matches if product.featured]
        if search:
            matches = [product for product in matches if product.matches(search)]

        offset = max(offset, 0)
        end = len(matches) if limit is None else offset + max(limit, 0)
        page = matches[offset:end]

        return ProductPage(
            products=page,
            total=len(matches),
            count=len(page),
            offset=offset,
            has_more=end < len(matches),
        )
