"""Cart item management — commands and handler.

The ledger itself clamps silently; this handler is the request boundary and
reports each problem distinctly instead.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer

from ordering.cart.cart import ShoppingCart, load_cart
from ordering.domain import ordering
from ordering.storefront import current_storefront
from shared.exceptions import CartEntryNotFound, QuantityExceedsStock, QuantityNotPositive

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Set an entry's quantity. Zero removes the entry."""

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    session_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        if command.quantity is None or command.quantity <= 0:
            raise QuantityNotPositive(command.quantity)

        product = current_storefront().catalog.get(command.product_id)
        repo, cart = load_cart(command.session_id)

        existing = cart.item_for(product.id)
        requested = command.quantity + (existing.quantity if existing else 0)
        if requested > product.stock:
            raise QuantityExceedsStock(product.id, requested, product.stock)

        item = cart.add_item(product, command.quantity)
        repo.add(cart)
        logger.info(
            "Item added to cart",
            session_id=command.session_id,
            product_id=product.id,
            quantity=item.quantity,
        )
        return item.quantity

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        if command.quantity < 0:
            raise QuantityNotPositive(command.quantity)

        repo, cart = load_cart(command.session_id)
        if cart.item_for(command.product_id) is None:
            raise CartEntryNotFound(command.product_id)

        product = current_storefront().catalog.get(command.product_id)
        if command.quantity > product.stock:
            raise QuantityExceedsStock(product.id, command.quantity, product.stock)

        item = cart.update_quantity(product, command.quantity)
        repo.add(cart)
        return item.quantity if item else 0

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo, cart = load_cart(command.session_id)
        if cart.item_for(command.product_id) is None:
            raise CartEntryNotFound(command.product_id)

        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo, cart = load_cart(command.session_id)
        cart.clear()
        repo.add(cart)
