"""Checkout — commands and handler.

Two ways to place an order:

- step by step, driving the session's checkout flow one command at a time;
- in one shot with ``PlaceOrder``, which runs a fresh flow from start to
  finish, optionally over cart lines sent with the request.

Both submit paths hold the session's submission guard, so a session never
has two payments in flight. The stored cart is only read until the order
exists; it is emptied afterwards.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.snapshot import CartSnapshot
from ordering.checkout.forms import PaymentInfo, ShippingInfo, validate_payment, validate_shipping
from ordering.domain import ordering
from ordering.pricing.shipping import Carrier
from ordering.storefront import current_storefront
from shared.exceptions import QuantityNotPositive, ValidationError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class PlaceOrder:
    session_id = Identifier(required=True)
    shipping_info = Text(required=True)  # JSON: ShippingInfo fields
    payment_info = Text(required=True)  # JSON: PaymentInfo fields
    items = Text()  # JSON: list of {product_id, quantity}; the session's cart when absent
    coupon_code = String(max_length=100)
    carrier = String(max_length=20, choices=Carrier)


@ordering.command(part_of="ShoppingCart")
class SubmitShippingInfo:
    session_id = Identifier(required=True)
    shipping_info = Text(required=True)  # JSON: ShippingInfo fields


@ordering.command(part_of="ShoppingCart")
class SubmitPaymentInfo:
    session_id = Identifier(required=True)
    payment_info = Text(required=True)  # JSON: PaymentInfo fields


@ordering.command(part_of="ShoppingCart")
class GoBack:
    session_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class SelectShippingRate:
    """Choose a carrier, or clear the choice by leaving ``carrier`` out."""

    session_id = Identifier(required=True)
    carrier = String(max_length=20, choices=Carrier)


@ordering.command(part_of="ShoppingCart")
class SubmitCheckout:
    session_id = Identifier(required=True)


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


@ordering.command_handler(part_of=ShoppingCart)
class CheckoutHandler:
    # -------------------------------------------------------------------
    # Step by step
    # -------------------------------------------------------------------
    @handle(SubmitShippingInfo)
    def submit_shipping_info(self, command):
        flow = current_storefront().sessions.open(command.session_id).active_checkout()
        flow.submit_shipping(ShippingInfo(**_loads(command.shipping_info)))
        return flow

    @handle(SubmitPaymentInfo)
    def submit_payment_info(self, command):
        flow = current_storefront().sessions.open(command.session_id).checkout
        flow.submit_payment(PaymentInfo(**_loads(command.payment_info)))
        return flow

    @handle(GoBack)
    def go_back(self, command):
        flow = current_storefront().sessions.open(command.session_id).checkout
        flow.back()
        return flow

    @handle(SelectShippingRate)
    def select_shipping_rate(self, command):
        flow = current_storefront().sessions.open(command.session_id).checkout
        if command.carrier:
            flow.select_shipping_rate(command.carrier)
        else:
            flow.clear_shipping_rate()
        return flow

    @handle(SubmitCheckout)
    def submit_checkout(self, command):
        storefront = current_storefront()
        session = storefront.sessions.open(command.session_id)

        with session.submission():
            cart = self._session_cart(command.session_id, storefront.catalog)
            order = session.checkout.submit(cart)
            self._empty_cart(command.session_id)
        return order

    # -------------------------------------------------------------------
    # One shot
    # -------------------------------------------------------------------
    @handle(PlaceOrder)
    def place_order(self, command):
        storefront = current_storefront()
        shipping_info = ShippingInfo(**_loads(command.shipping_info))
        payment_info = PaymentInfo(**_loads(command.payment_info))

        errors = validate_shipping(shipping_info)
        errors.update(validate_payment(payment_info))
        if errors:
            raise ValidationError(errors)

        session = storefront.sessions.open(command.session_id)
        with session.submission():
            if command.items is None:
                cart = self._session_cart(command.session_id, storefront.catalog)
            else:
                cart = self._draft_cart(command.session_id, _loads(command.items), storefront.catalog)

            # The coupon rides on the snapshot only; the stored cart keeps its own
            if command.coupon_code:
                coupon = storefront.coupons.validate(command.coupon_code, cart.subtotal)
                cart = cart.with_coupon(coupon.code)

            flow = storefront.new_checkout(command.session_id)
            if command.carrier:
                flow.select_shipping_rate(command.carrier)
            flow.submit_shipping(shipping_info)
            flow.submit_payment(payment_info)
            order = flow.submit(cart)

            self._empty_cart(command.session_id)
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _session_cart(self, session_id, catalog) -> CartSnapshot:
        repo = current_domain.repository_for(ShoppingCart)
        try:
            return repo.get(session_id).snapshot(catalog)
        except ObjectNotFoundError:
            return CartSnapshot(session_id=session_id)

    def _draft_cart(self, session_id, lines, catalog) -> CartSnapshot:
        """A cart built from lines sent by the client. It is never stored."""
        draft = ShoppingCart.create(session_id)
        for line in lines:
            quantity = int(line.get("quantity", 0))
            if quantity <= 0:
                raise QuantityNotPositive(quantity)
            draft.add_item(catalog.get(str(line.get("product_id"))), quantity)
        return draft.snapshot(catalog)

    def _empty_cart(self, session_id) -> None:
        repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = repo.get(session_id)
        except ObjectNotFoundError:
            return

        cart.clear()
        cart.remove_coupon()
        repo.add(cart)
        logger.info("Cart emptied after order", session_id=session_id)
