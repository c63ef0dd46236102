"""Shopping Cart aggregate: the per-session cart ledger.

The cart is keyed by the shopper's session and holds one item per product.
Quantities are silently clamped to the product's stock at the time of the
add/update; there is no backorder concept. Every mutation raises a domain
event carrying the resulting item count.
"""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from ordering.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartCouponRemoved,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.cart.snapshot import CartLine, CartSnapshot
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    session_id = Identifier(identifier=True)
    items = HasMany(CartItem)
    applied_coupon_code = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def snapshot(self, catalog) -> CartSnapshot:
        """Resolve the items against the catalog into a detached snapshot.

        Products no longer in the catalog are dropped and quantities are
        clamped to the current stock.
        """
        lines = []
        for item in self.items:
            product = catalog.find_by_id(str(item.product_id))
            if product is None:
                logger.warning("Dropping unknown product from cart", session_id=self.session_id, product_id=item.product_id)
                continue
            quantity = min(item.quantity, product.stock)
            if quantity > 0:
                lines.append(CartLine(product=product, quantity=quantity))
        return CartSnapshot(
            session_id=str(self.session_id),
            lines=tuple(lines),
            coupon_code=self.applied_coupon_code,
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product: Product, quantity: int = 1):
        """Add ``quantity`` of a product, clamped to its stock.

        Returns the resulting item. Non-positive requests and out-of-stock
        products leave the cart untouched.
        """
        existing = self.item_for(product.id)
        if quantity <= 0 or product.stock <= 0:
            logger.info("Nothing added to cart", session_id=self.session_id, product_id=product.id, stock=product.stock)
            return existing

        now = datetime.now(UTC)
        current = existing.quantity if existing else 0
        new_quantity = min(current + quantity, product.stock)

        if existing:
            existing.quantity = new_quantity
            item = existing
        else:
            item = CartItem(product_id=product.id, quantity=new_quantity, added_at=now)
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                session_id=str(self.session_id),
                product_id=product.id,
                requested_quantity=quantity,
                quantity=new_quantity,
                item_count=self.item_count,
            )
        )
        return item

    def update_quantity(self, product: Product, quantity: int):
        """Replace an item's quantity, clamped to stock; zero or less removes it.

        Products not in the cart are ignored.
        """
        existing = self.item_for(product.id)
        if existing is None:
            return None

        new_quantity = min(quantity, product.stock)
        if new_quantity <= 0:
            self.remove_item(product.id)
            return None

        previous = existing.quantity
        existing.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                session_id=str(self.session_id),
                product_id=product.id,
                previous_quantity=previous,
                new_quantity=new_quantity,
                item_count=self.item_count,
            )
        )
        return existing

    def remove_item(self, product_id) -> None:
        item = self.item_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                session_id=str(self.session_id),
                product_id=str(product_id),
                item_count=self.item_count,
            )
        )

    def clear(self) -> None:
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(session_id=str(self.session_id), item_count=0))

    # -------------------------------------------------------------------
    # Coupon management
    # -------------------------------------------------------------------
    def apply_coupon(self, coupon_code: str) -> None:
        """Remember a coupon code; a new code replaces the previous one."""
        replaced = self.applied_coupon_code
        self.applied_coupon_code = coupon_code.upper()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCouponApplied(
                session_id=str(self.session_id),
                coupon_code=self.applied_coupon_code,
                replaced_code=replaced,
                item_count=self.item_count,
            )
        )

    def remove_coupon(self) -> None:
        if not self.applied_coupon_code:
            return

        removed = self.applied_coupon_code
        self.applied_coupon_code = None
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartCouponRemoved(
                session_id=str(self.session_id),
                coupon_code=removed,
                item_count=self.item_count,
            )
        )


def load_cart(session_id):
    """Return the repository and the session's cart, starting an empty cart if none is stored."""
    repo = current_domain.repository_for(ShoppingCart)
    try:
        return repo, repo.get(session_id)
    except ObjectNotFoundError:
        return repo, ShoppingCart.create(session_id)
