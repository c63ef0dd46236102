"""Order aggregate: the record of a successful checkout.

An Order is built exactly once, after the payment has been authorized, from a
snapshot of the cart. Prices are locked at checkout. Only the last four card
digits and the cardholder name survive from the payment details.
"""

import time
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.checkout.forms import ShippingInfo
from ordering.domain import ordering
from ordering.order.events import OrderPlaced
from ordering.pricing.calculator import PriceBreakdown
from ordering.pricing.money import to_cents, to_decimal

ORDER_ID_PREFIX = "HRD"


class OrderStatus(Enum):
    CONFIRMED = "confirmed"


def generate_order_id() -> str:
    return f"{ORDER_ID_PREFIX}-{int(time.time() * 1000)}-{uuid4().hex[:9]}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class DeliveryDetails:
    """Who the order ships to, as entered at checkout."""

    first_name = String(max_length=255)
    last_name = String(max_length=255)
    email = String(max_length=255)
    phone = String(max_length=255)
    address = String(max_length=255)
    apartment = String(max_length=255)
    city = String(max_length=255)
    state = String(max_length=255)
    zip_code = String(max_length=255)
    country = String(max_length=255)


@ordering.value_object(part_of="Order")
class MaskedPayment:
    card_last4 = String(max_length=4)
    name_on_card = String(max_length=255)


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Unrounded amounts locked at checkout."""

    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping = Float(default=0.0)
    discount = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A cart line frozen at submission time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> Decimal:
        return to_decimal(self.unit_price) * self.quantity


class OrderSummary(BaseModel):
    id: str
    status: str
    total: Decimal
    estimated_delivery: datetime

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    id = Identifier(identifier=True)
    session_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.CONFIRMED.value)
    items = HasMany(OrderItem)
    delivery = ValueObject(DeliveryDetails)
    payment = ValueObject(MaskedPayment)
    pricing = ValueObject(OrderPricing)
    coupon_code = String(max_length=100)
    transaction_id = String(max_length=255)
    carrier = String(max_length=50)
    created_at = DateTime()
    estimated_delivery = DateTime()

    @classmethod
    def create(
        cls,
        session_id,
        lines,
        shipping_info: ShippingInfo,
        card_number: str,
        name_on_card: str,
        pricing: PriceBreakdown,
        transaction_id=None,
        delivery_days: int = 5,
        now=None,
    ):
        """Build a confirmed order from a cart snapshot and checkout data.

        Args:
            lines: Cart lines to freeze into order items.
            card_number: The full card number; only its last four digits are kept.
            pricing: The unrounded breakdown the payment was authorized for.
            delivery_days: Days from creation until the estimated delivery.
        """
        now = now or datetime.now(UTC)
        order = cls(
            id=generate_order_id(),
            session_id=session_id,
            status=OrderStatus.CONFIRMED.value,
            items=[
                OrderItem(
                    product_id=line.product.id,
                    name=line.product.name,
                    unit_price=float(line.product.price),
                    quantity=line.quantity,
                )
                for line in lines
            ],
            delivery=DeliveryDetails(**shipping_info.model_dump()),
            payment=MaskedPayment(card_last4=card_number[-4:], name_on_card=name_on_card),
            pricing=OrderPricing(
                subtotal=float(pricing.subtotal),
                tax=float(pricing.tax),
                shipping=float(pricing.shipping),
                discount=float(pricing.discount),
                total=float(pricing.total),
            ),
            coupon_code=pricing.coupon_code,
            transaction_id=transaction_id,
            carrier=pricing.carrier,
            created_at=now,
            estimated_delivery=now + timedelta(days=delivery_days),
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                session_id=str(session_id),
                item_count=order.item_count,
                total=float(pricing.total),
                coupon_code=pricing.coupon_code,
                transaction_id=transaction_id,
                placed_at=now,
            )
        )
        return order

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def shipping_info(self) -> ShippingInfo:
        values = {name: getattr(self.delivery, name) for name in ShippingInfo.model_fields}
        return ShippingInfo(**{name: value for name, value in values.items() if value is not None})

    def price_breakdown(self) -> PriceBreakdown:
        return PriceBreakdown(
            subtotal=to_decimal(self.pricing.subtotal),
            tax=to_decimal(self.pricing.tax),
            shipping=to_decimal(self.pricing.shipping),
            discount=to_decimal(self.pricing.discount),
            total=to_decimal(self.pricing.total),
            coupon_code=self.coupon_code,
            carrier=self.carrier,
        )

    def summary(self) -> OrderSummary:
        return OrderSummary(
            id=str(self.id),
            status=self.status,
            total=to_cents(self.pricing.total),
            estimated_delivery=self.estimated_delivery,
        )
