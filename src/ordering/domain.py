"""Ordering bounded context — Shopping Cart, Checkout and Orders.

Handles the per-session cart ledger, coupon application, the step-by-step
checkout flow and the orders it produces.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
