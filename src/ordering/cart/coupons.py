"""Cart coupon management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String

from ordering.cart.cart import ShoppingCart, load_cart
from ordering.domain import ordering
from ordering.storefront import current_storefront

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class ApplyCouponToCart:
    """Apply a coupon code to a session's cart, replacing any previous one."""

    session_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=100)


@ordering.command(part_of="ShoppingCart")
class RemoveCouponFromCart:
    session_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartCouponHandler:
    @handle(ApplyCouponToCart)
    def apply_coupon(self, command):
        storefront = current_storefront()
        repo, cart = load_cart(command.session_id)

        subtotal = cart.snapshot(storefront.catalog).subtotal
        coupon = storefront.coupons.validate(command.coupon_code, subtotal)
        cart.apply_coupon(coupon.code)
        repo.add(cart)

        logger.info("Coupon applied to cart", session_id=command.session_id, coupon_code=coupon.code)
        return coupon

    @handle(RemoveCouponFromCart)
    def remove_coupon(self, command):
        repo, cart = load_cart(command.session_id)
        cart.remove_coupon()
        repo.add(cart)
