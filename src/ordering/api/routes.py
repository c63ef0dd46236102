"""FastAPI routes for the Ordering domain: carts, coupons, checkout and orders.

Checkout submissions wait on the simulated payment processor, so those two
endpoints are plain functions and run in the threadpool. Reads never create
a cart or open a session.
"""

import json

from fastapi import APIRouter, Depends

from ordering.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutStateResponse,
    CouponResponse,
    CouponValidationResponse,
    OrderResponse,
    OrderSummaryResponse,
    PaymentInfoRequest,
    SelectShippingRateRequest,
    ShippingInfoRequest,
    ShippingRateResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    ValidateCouponRequest,
)
from ordering.cart.closing import CloseSession
from ordering.cart.coupons import ApplyCouponToCart, RemoveCouponFromCart
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from ordering.checkout.placement import (
    GoBack,
    PlaceOrder,
    SelectShippingRate,
    SubmitCheckout,
    SubmitPaymentInfo,
    SubmitShippingInfo,
)
from ordering.pricing.money import to_cents, to_decimal
from ordering.pricing.shipping import quote_all
from shared.dependencies import get_storefront


def _cart_response(storefront, session_id: str) -> CartResponse:
    cart = storefront.cart_snapshot(session_id)
    return CartResponse.build(cart, storefront.checkout_for(session_id).quote(cart))


def _checkout_response(storefront, flow) -> CheckoutStateResponse:
    return CheckoutStateResponse.from_flow(flow, storefront.cart_snapshot(flow.session_id))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session_id: str, storefront=Depends(get_storefront)) -> CartResponse:
    return _cart_response(storefront, session_id)


@cart_router.post("/{session_id}/items", response_model=CartResponse)
async def add_cart_item(session_id: str, body: AddToCartRequest, storefront=Depends(get_storefront)) -> CartResponse:
    command = AddToCart(
        session_id=session_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    storefront.process(command)
    return _cart_response(storefront, session_id)


@cart_router.put("/{session_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    session_id: str,
    product_id: str,
    body: UpdateCartQuantityRequest,
    storefront=Depends(get_storefront),
) -> CartResponse:
    command = UpdateCartQuantity(
        session_id=session_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    storefront.process(command)
    return _cart_response(storefront, session_id)


@cart_router.delete("/{session_id}/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(session_id: str, product_id: str, storefront=Depends(get_storefront)) -> CartResponse:
    storefront.process(RemoveFromCart(session_id=session_id, product_id=product_id))
    return _cart_response(storefront, session_id)


@cart_router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(session_id: str, storefront=Depends(get_storefront)) -> CartResponse:
    storefront.process(ClearCart(session_id=session_id))
    return _cart_response(storefront, session_id)


@cart_router.post("/{session_id}/close", response_model=StatusResponse)
async def close_session(session_id: str, storefront=Depends(get_storefront)) -> StatusResponse:
    """End the session and forget its stored cart."""
    storefront.process(CloseSession(session_id=session_id))
    return StatusResponse(status="closed")


@cart_router.post("/{session_id}/coupon", response_model=CartResponse)
async def apply_cart_coupon(
    session_id: str,
    body: ApplyCouponRequest,
    storefront=Depends(get_storefront),
) -> CartResponse:
    storefront.process(ApplyCouponToCart(session_id=session_id, coupon_code=body.coupon_code))
    return _cart_response(storefront, session_id)


@cart_router.delete("/{session_id}/coupon", response_model=CartResponse)
async def remove_cart_coupon(session_id: str, storefront=Depends(get_storefront)) -> CartResponse:
    storefront.process(RemoveCouponFromCart(session_id=session_id))
    return _cart_response(storefront, session_id)


# ---------------------------------------------------------------------------
# Coupon Router
# ---------------------------------------------------------------------------
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.get("", response_model=list[CouponResponse])
async def list_coupons(storefront=Depends(get_storefront)) -> list[CouponResponse]:
    return [CouponResponse.from_coupon(coupon) for coupon in storefront.coupons.available()]


@coupon_router.post("/validate", response_model=CouponValidationResponse)
async def validate_coupon(body: ValidateCouponRequest, storefront=Depends(get_storefront)) -> CouponValidationResponse:
    """Check a code against an order total without touching any cart."""
    order_total = to_decimal(body.order_total)
    coupon = storefront.coupons.validate(body.coupon_code, order_total)
    discount = storefront.coupons.calculate_discount(coupon, order_total)
    return CouponValidationResponse(
        coupon=CouponResponse.from_coupon(coupon),
        discount=float(to_cents(discount)),
    )


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderSummaryResponse)
def place_order(body: CheckoutRequest, storefront=Depends(get_storefront)) -> OrderSummaryResponse:
    """Run the whole checkout in one request.

    Uses the session's cart unless ``items`` carries the cart lines.
    """
    command = PlaceOrder(
        session_id=body.session_id,
        shipping_info=json.dumps(body.shipping_info.model_dump()),
        payment_info=json.dumps(body.payment_info.model_dump()),
        items=json.dumps([line.model_dump() for line in body.items]) if body.items is not None else None,
        coupon_code=body.coupon_code,
        carrier=body.carrier.value if body.carrier else None,
    )
    order = storefront.process(command)
    return OrderSummaryResponse.from_summary(order.summary())


@checkout_router.get("/{session_id}", response_model=CheckoutStateResponse)
async def get_checkout(session_id: str, storefront=Depends(get_storefront)) -> CheckoutStateResponse:
    return _checkout_response(storefront, storefront.checkout_for(session_id))


@checkout_router.put("/{session_id}/shipping", response_model=CheckoutStateResponse)
async def submit_shipping_info(
    session_id: str,
    body: ShippingInfoRequest,
    storefront=Depends(get_storefront),
) -> CheckoutStateResponse:
    command = SubmitShippingInfo(
        session_id=session_id,
        shipping_info=json.dumps(body.shipping_info.model_dump()),
    )
    return _checkout_response(storefront, storefront.process(command))


@checkout_router.put("/{session_id}/payment", response_model=CheckoutStateResponse)
async def submit_payment_info(
    session_id: str,
    body: PaymentInfoRequest,
    storefront=Depends(get_storefront),
) -> CheckoutStateResponse:
    command = SubmitPaymentInfo(
        session_id=session_id,
        payment_info=json.dumps(body.payment_info.model_dump()),
    )
    return _checkout_response(storefront, storefront.process(command))


@checkout_router.post("/{session_id}/back", response_model=CheckoutStateResponse)
async def go_back(session_id: str, storefront=Depends(get_storefront)) -> CheckoutStateResponse:
    return _checkout_response(storefront, storefront.process(GoBack(session_id=session_id)))


@checkout_router.put("/{session_id}/shipping-rate", response_model=CheckoutStateResponse)
async def select_shipping_rate(
    session_id: str,
    body: SelectShippingRateRequest,
    storefront=Depends(get_storefront),
) -> CheckoutStateResponse:
    command = SelectShippingRate(
        session_id=session_id,
        carrier=body.carrier.value if body.carrier else None,
    )
    return _checkout_response(storefront, storefront.process(command))


@checkout_router.get("/{session_id}/shipping-rates", response_model=list[ShippingRateResponse])
async def list_shipping_rates(session_id: str, storefront=Depends(get_storefront)) -> list[ShippingRateResponse]:
    cart = storefront.cart_snapshot(session_id)
    return [ShippingRateResponse.from_rate(rate) for rate in quote_all(cart.line_count)]


@checkout_router.post("/{session_id}/submit", status_code=201, response_model=OrderSummaryResponse)
def submit_checkout(session_id: str, storefront=Depends(get_storefront)) -> OrderSummaryResponse:
    order = storefront.process(SubmitCheckout(session_id=session_id))
    return OrderSummaryResponse.from_summary(order.summary())


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, storefront=Depends(get_storefront)) -> OrderResponse:
    return OrderResponse.from_order(storefront.find_order(order_id))
