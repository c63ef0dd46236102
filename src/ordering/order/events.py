"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A checkout completed: the payment was authorized and the order recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    coupon_code = String(max_length=100)
    transaction_id = String(max_length=255)
    placed_at = DateTime(required=True)
