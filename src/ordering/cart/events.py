"""Domain events for the ShoppingCart aggregate.

Every cart mutation raises one of these, carrying the cart's resulting
``item_count`` so dependent views can recompute without reloading the cart.
"""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart (or its quantity increased)."""

    __version__ = 1

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    requested_quantity = Integer(required=True)
    quantity = Integer(required=True)  # Resulting quantity after clamping to stock
    item_count = Integer(default=0)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart entry was replaced."""

    __version__ = 1

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    item_count = Integer(default=0)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An entry was removed from the cart."""

    __version__ = 1

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    item_count = Integer(default=0)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """Every entry was removed from the cart."""

    __version__ = 1

    session_id = Identifier(required=True)
    item_count = Integer(default=0)


@ordering.event(part_of="ShoppingCart")
class CartCouponApplied:
    """A coupon code was applied, replacing any previous one."""

    __version__ = 1

    session_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=100)
    replaced_code = String(max_length=100)
    item_count = Integer(default=0)


@ordering.event(part_of="ShoppingCart")
class CartCouponRemoved:
    """The applied coupon was removed."""

    __version__ = 1

    session_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=100)
    item_count = Integer(default=0)
