"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept apart from the internal commands. Money
leaves the API cent-rounded, as plain numbers.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.cart.snapshot import CartLine, CartSnapshot
from ordering.checkout.flow import CheckoutFlow
from ordering.checkout.forms import PaymentInfo, ShippingInfo
from ordering.coupon.coupon import Coupon
from ordering.order.order import Order, OrderSummary
from ordering.pricing.calculator import PriceBreakdown
from ordering.pricing.money import to_cents
from ordering.pricing.shipping import Carrier, ShippingRate


def _money(value) -> float:
    return float(to_cents(value))


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    quantity: int


class PricingResponse(BaseModel):
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    coupon_code: str | None = None
    carrier: str | None = None

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown) -> "PricingResponse":
        rounded = breakdown.rounded()
        return cls(
            subtotal=float(rounded.subtotal),
            tax=float(rounded.tax),
            shipping=float(rounded.shipping),
            discount=float(rounded.discount),
            total=float(rounded.total),
            coupon_code=rounded.coupon_code,
            carrier=rounded.carrier,
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "1", "quantity": 2}]}}

    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int


class ApplyCouponRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"coupon_code": "HOLIDAY20"}]}}

    coupon_code: str = Field(..., min_length=1, max_length=100)


class CartEntryResponse(BaseModel):
    product_id: str
    name: str
    image: str
    price: float
    quantity: int
    stock: int
    line_total: float

    @classmethod
    def from_line(cls, line: CartLine) -> "CartEntryResponse":
        return cls(
            product_id=line.product_id,
            name=line.product.name,
            image=line.product.image,
            price=_money(line.product.price),
            quantity=line.quantity,
            stock=line.product.stock,
            line_total=_money(line.line_total),
        )


class CartResponse(BaseModel):
    session_id: str
    items: list[CartEntryResponse]
    item_count: int
    subtotal: float
    coupon_code: str | None = None
    pricing: PricingResponse

    @classmethod
    def build(cls, cart: CartSnapshot, pricing: PriceBreakdown) -> "CartResponse":
        return cls(
            session_id=cart.session_id,
            items=[CartEntryResponse.from_line(line) for line in cart.lines],
            item_count=cart.item_count,
            subtotal=_money(cart.subtotal),
            coupon_code=cart.coupon_code,
            pricing=PricingResponse.from_breakdown(pricing),
        )


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
class ValidateCouponRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"coupon_code": "HOLIDAY20", "order_total": 89.99}]}}

    coupon_code: str = Field(..., min_length=1, max_length=100)
    order_total: float = Field(..., ge=0)


class CouponResponse(BaseModel):
    code: str
    type: str
    discount: float
    min_order: float | None = None
    max_discount: float | None = None
    description: str

    @classmethod
    def from_coupon(cls, coupon: Coupon) -> "CouponResponse":
        return cls(
            code=coupon.code,
            type=coupon.type.value,
            discount=float(coupon.discount),
            min_order=float(coupon.min_order) if coupon.min_order is not None else None,
            max_discount=float(coupon.max_discount) if coupon.max_discount is not None else None,
            description=coupon.description,
        )


class CouponValidationResponse(BaseModel):
    valid: bool = True
    coupon: CouponResponse
    discount: float


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
_SHIPPING_EXAMPLE = {
    "first_name": "Noel",
    "last_name": "Winters",
    "email": "noel@example.com",
    "address": "1 Snowflake Lane",
    "city": "North Pole",
    "state": "AK",
    "zip_code": "99705",
}

_PAYMENT_EXAMPLE = {
    "card_number": "4242 4242 4242 4242",
    "expiry_month": "12",
    "expiry_year": "2030",
    "cvv": "123",
    "name_on_card": "Noel Winters",
}


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "session-123",
                    "shipping_info": _SHIPPING_EXAMPLE,
                    "payment_info": _PAYMENT_EXAMPLE,
                    "coupon_code": "HOLIDAY20",
                }
            ]
        }
    }

    session_id: str = Field(..., min_length=1)
    items: list[CartLineSchema] | None = None
    shipping_info: ShippingInfo
    payment_info: PaymentInfo
    coupon_code: str | None = None
    carrier: Carrier | None = None


class ShippingInfoRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"shipping_info": _SHIPPING_EXAMPLE}]}}

    shipping_info: ShippingInfo


class PaymentInfoRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"payment_info": _PAYMENT_EXAMPLE}]}}

    payment_info: PaymentInfo


class SelectShippingRateRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"carrier": "expedited"}]}}

    carrier: Carrier | None = None


class ShippingRateResponse(BaseModel):
    carrier: str
    rate: float
    estimated_days: int
    service: str

    @classmethod
    def from_rate(cls, rate: ShippingRate) -> "ShippingRateResponse":
        return cls(
            carrier=rate.carrier.value,
            rate=_money(rate.rate),
            estimated_days=rate.estimated_days,
            service=rate.service,
        )


class MaskedPaymentResponse(BaseModel):
    card_last4: str
    name_on_card: str


class CheckoutFailureResponse(BaseModel):
    reason: str
    message: str


class CheckoutStateResponse(BaseModel):
    """Where a session's checkout stands. Card number and CVV never leave."""

    session_id: str
    step: str
    shipping_info: ShippingInfo
    payment: MaskedPaymentResponse
    same_as_shipping: bool
    errors: dict[str, list[str]]
    failure: CheckoutFailureResponse | None = None
    carrier: str | None = None
    pricing: PricingResponse
    order_id: str | None = None
    attempts: int

    @classmethod
    def from_flow(cls, flow: CheckoutFlow, cart: CartSnapshot) -> "CheckoutStateResponse":
        failure = None
        if flow.failure is not None:
            failure = CheckoutFailureResponse(reason=flow.failure.reason.value, message=flow.failure.message)
        return cls(
            session_id=flow.session_id,
            step=flow.step.value,
            shipping_info=flow.shipping_info,
            payment=MaskedPaymentResponse(
                card_last4=flow.payment_info.card_last4,
                name_on_card=flow.payment_info.name_on_card,
            ),
            same_as_shipping=flow.payment_info.same_as_shipping,
            errors=flow.errors,
            failure=failure,
            carrier=flow.carrier.value if flow.carrier else None,
            pricing=PricingResponse.from_breakdown(flow.quote(cart)),
            order_id=flow.order.id if flow.order else None,
            attempts=flow.attempts,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderSummaryResponse(BaseModel):
    id: str
    status: str
    total: float
    estimated_delivery: datetime

    @classmethod
    def from_summary(cls, summary: OrderSummary) -> "OrderSummaryResponse":
        return cls(
            id=summary.id,
            status=summary.status,
            total=float(summary.total),
            estimated_delivery=summary.estimated_delivery,
        )


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int
    line_total: float


class OrderResponse(BaseModel):
    id: str
    status: str
    items: list[OrderItemResponse]
    shipping_info: ShippingInfo
    payment: MaskedPaymentResponse
    pricing: PricingResponse
    coupon_code: str | None = None
    transaction_id: str | None = None
    carrier: str | None = None
    created_at: datetime
    estimated_delivery: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            status=order.status,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    unit_price=_money(item.unit_price),
                    quantity=item.quantity,
                    line_total=_money(item.line_total),
                )
                for item in order.items
            ],
            shipping_info=order.shipping_info,
            payment=MaskedPaymentResponse(
                card_last4=order.payment.card_last4,
                name_on_card=order.payment.name_on_card,
            ),
            pricing=PricingResponse.from_breakdown(order.price_breakdown()),
            coupon_code=order.coupon_code,
            transaction_id=order.transaction_id,
            carrier=order.carrier,
            created_at=order.created_at,
            estimated_delivery=order.estimated_delivery,
        )


class StatusResponse(BaseModel):
    status: str = "ok"
