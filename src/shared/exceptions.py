"""Storefront exceptions.

Each failure the storefront reports is one of protean's exception families
(``ValidationError``, ``ObjectNotFoundError``, ``InvalidOperationError``)
carrying a ``code`` so callers can tell failures apart without parsing
messages. Validation errors are field-attributed: ``messages`` maps a field
name to a list of human readable problems.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
class QuantityNotPositive(ValidationError):
    code = "quantity_not_positive"

    def __init__(self, quantity: int) -> None:
        messages = {"quantity": ["Quantity must be greater than 0"]}
        super().__init__(messages)
        self.messages = messages
        self.message = "Quantity must be greater than 0"
        self.quantity = quantity


class CouponRejected(ValidationError):
    code = "invalid_coupon"

    def __init__(self, coupon_code: str) -> None:
        messages = {"coupon_code": ["Invalid or expired coupon code"]}
        super().__init__(messages)
        self.messages = messages
        self.message = "Invalid or expired coupon code"
        self.coupon_code = coupon_code


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class ProductNotFound(ObjectNotFoundError):
    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        self.message = f"Product {product_id} not found"
        super().__init__(self.message)
        self.messages = self.message
        self.product_id = product_id


class OrderNotFound(ObjectNotFoundError):
    code = "order_not_found"

    def __init__(self, order_id: str) -> None:
        self.message = f"Order {order_id} not found"
        super().__init__(self.message)
        self.messages = self.message
        self.order_id = order_id


class CartEntryNotFound(ObjectNotFoundError):
    code = "cart_entry_not_found"

    def __init__(self, product_id: str) -> None:
        self.message = f"Item {product_id} not found in cart"
        super().__init__(self.message)
        self.messages = self.message
        self.product_id = product_id


# ---------------------------------------------------------------------------
# Rejected operations
# ---------------------------------------------------------------------------
class QuantityExceedsStock(InvalidOperationError):
    code = "quantity_exceeds_stock"

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.message = f"Only {available} items available"
        super().__init__(self.message)
        self.messages = self.message
        self.product_id = product_id
        self.requested = requested
        self.available = available


class PaymentDeclined(InvalidOperationError):
    code = "payment_declined"

    def __init__(self, reason: str) -> None:
        self.message = reason
        super().__init__(reason)
        self.messages = reason
        self.reason = reason


__all__ = [
    "CartEntryNotFound",
    "CouponRejected",
    "InvalidOperationError",
    "ObjectNotFoundError",
    "OrderNotFound",
    "PaymentDeclined",
    "ProductNotFound",
    "QuantityExceedsStock",
    "QuantityNotPositive",
    "ValidationError",
]
