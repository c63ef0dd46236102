"""Product and Category reference data.

Products are immutable value objects: they are built once when the catalog is
loaded and never mutated afterwards. Prices are decimals so that cart and
pricing arithmetic never accumulates float error.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class Product(BaseModel):
    """A sellable item in the storefront catalog."""

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    price: Decimal = Field(gt=0)
    original_price: Decimal | None = Field(default=None, gt=0)
    image: str = ""
    category: str
    stock: int = Field(ge=0)
    featured: bool = False
    tags: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @field_validator("tags", mode="before")
    @classmethod
    def tags_are_unique(cls, value):
        # Keep first occurrence order, drop duplicates
        return tuple(dict.fromkeys(value or ()))

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def on_sale(self) -> bool:
        return self.original_price is not None and self.original_price > self.price

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name, description or any tag."""
        needle = term.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


class Category(BaseModel):
    id: str
    name: str
    count: int = Field(ge=0)

    model_config = {"frozen": True}
