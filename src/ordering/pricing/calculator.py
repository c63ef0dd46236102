"""Pricing Calculator: subtotal → tax → shipping → discount → total.

Everything is computed with unrounded decimals. ``PriceBreakdown.rounded()``
produces the cent-rounded figures shown to shoppers and returned by the API.
"""

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel

from ordering.cart.snapshot import CartLine, CartSnapshot
from ordering.coupon.coupon import Coupon
from ordering.coupon.engine import CouponEngine
from ordering.pricing.money import ZERO, to_cents
from ordering.pricing.shipping import ShippingRate

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("50")
FLAT_SHIPPING_FEE = Decimal("9.99")


class PriceBreakdown(BaseModel):
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal
    coupon_code: str | None = None
    carrier: str | None = None

    model_config = {"frozen": True}

    def rounded(self) -> "PriceBreakdown":
        """Cent-rounded copy for presentation."""
        return self.model_copy(
            update={
                "subtotal": to_cents(self.subtotal),
                "tax": to_cents(self.tax),
                "shipping": to_cents(self.shipping),
                "discount": to_cents(self.discount),
                "total": to_cents(self.total),
            }
        )


class PricingCalculator:
    def __init__(self, coupon_engine: CouponEngine) -> None:
        self.coupon_engine = coupon_engine

    @staticmethod
    def subtotal(entries: Iterable[CartLine]) -> Decimal:
        return sum((entry.product.price * entry.quantity for entry in entries), ZERO)

    @staticmethod
    def tax(subtotal: Decimal) -> Decimal:
        return subtotal * TAX_RATE

    @staticmethod
    def shipping(subtotal: Decimal, rate: ShippingRate | None = None) -> Decimal:
        if rate is not None:
            return rate.rate
        return ZERO if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE

    def calculate(
        self,
        entries: Iterable[CartLine],
        coupon: Coupon | None = None,
        shipping_rate: ShippingRate | None = None,
    ) -> PriceBreakdown:
        """Price a cart snapshot.

        The coupon is expected to have been validated already; its discount is
        computed against the subtotal, and the engine caps it there.
        """
        subtotal = self.subtotal(entries)
        tax = self.tax(subtotal)
        shipping = self.shipping(subtotal, shipping_rate)
        discount = self.coupon_engine.calculate_discount(coupon, subtotal) if coupon else ZERO

        return PriceBreakdown(
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=subtotal + tax + shipping - discount,
            coupon_code=coupon.code if coupon else None,
            carrier=shipping_rate.carrier.value if shipping_rate else None,
        )

    def price_cart(self, cart: CartSnapshot, shipping_rate: ShippingRate | None = None) -> PriceBreakdown:
        """Price a cart snapshot with its coupon, if it still qualifies.

        A coupon the cart no longer qualifies for (the cart shrank below the
        minimum) contributes no discount here; checkout rejects it outright.
        """
        coupon = None
        if cart.coupon_code and self.coupon_engine.is_valid(cart.coupon_code, cart.subtotal):
            coupon = self.coupon_engine.find(cart.coupon_code)
        return self.calculate(cart.lines, coupon=coupon, shipping_rate=shipping_rate)
