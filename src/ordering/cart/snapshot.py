"""Read-only views of a cart, resolved against the catalog.

Pricing and checkout work over a ``CartSnapshot`` rather than the aggregate,
so quoting a price or placing an order never mutates the stored cart.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from catalogue.product.product import Product


class CartLine(BaseModel):
    """A product and how many of it the shopper wants."""

    product: Product
    quantity: int = Field(ge=1)

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class CartSnapshot(BaseModel):
    session_id: str
    lines: tuple[CartLine, ...] = ()
    coupon_code: str | None = None

    model_config = {"frozen": True}

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line_for(self, product_id: str) -> CartLine | None:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def with_coupon(self, coupon_code: str | None) -> "CartSnapshot":
        return self.model_copy(update={"coupon_code": coupon_code})
