"""Storefront composition root.

Builds the catalog, coupon engine, pricing, gateway and session registry once
per application, and processes ordering commands synchronously through the
``ordering`` domain. Command handlers reach these collaborators through
``current_storefront()`` while a command is being processed.
"""

import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.catalog import Catalog
from ordering.cart.cart import ShoppingCart
from ordering.cart.snapshot import CartSnapshot
from ordering.checkout.flow import CheckoutFlow
from ordering.coupon.engine import CouponEngine
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.pricing.calculator import PricingCalculator
from ordering.session import SessionRegistry
from payments.gateway import PaymentGateway, build_gateway
from shared.config import Settings, load_settings
from shared.exceptions import OrderNotFound

logger = structlog.get_logger(__name__)

_active: ContextVar["Storefront"] = ContextVar("storefront")


def current_storefront() -> "Storefront":
    """The storefront whose command is being processed."""
    try:
        return _active.get()
    except LookupError:
        raise RuntimeError("No storefront is processing a command") from None


class Storefront:
    def __init__(
        self,
        settings: Settings | None = None,
        catalog: Catalog | None = None,
        gateway: PaymentGateway | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or load_settings()
        self.catalog = catalog or Catalog.load()
        self.coupons = CouponEngine()
        self.pricing = PricingCalculator(self.coupons)
        self.gateway = gateway or build_gateway(self.settings)
        self._sleep = sleep
        self.sessions = SessionRegistry(self.new_checkout)

        logger.info(
            "Storefront ready",
            env=self.settings.env,
            products=len(self.catalog),
            gateway=type(self.gateway).__name__,
        )

    def new_checkout(self, session_id: str) -> CheckoutFlow:
        return CheckoutFlow(
            session_id,
            pricing=self.pricing,
            gateway=self.gateway,
            processing_delay=self.settings.payment_delay,
            delivery_days=self.settings.delivery_days,
            sleep=self._sleep,
        )

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def process(self, command) -> Any:
        token = _active.set(self)
        try:
            with ordering.domain_context():
                return current_domain.process(command, asynchronous=False)
        finally:
            _active.reset(token)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def cart_snapshot(self, session_id: str) -> CartSnapshot:
        """The session's cart, or an empty one. Never creates a cart."""
        with ordering.domain_context():
            try:
                cart = current_domain.repository_for(ShoppingCart).get(session_id)
            except ObjectNotFoundError:
                return CartSnapshot(session_id=session_id)
            return cart.snapshot(self.catalog)

    def checkout_for(self, session_id: str) -> CheckoutFlow:
        """The session's checkout, or a fresh unsaved one. Never opens a session."""
        session = self.sessions.get(session_id)
        if session is None:
            return self.new_checkout(session_id)
        return session.checkout

    def find_order(self, order_id: str) -> Order:
        with ordering.domain_context():
            try:
                return current_domain.repository_for(Order).get(order_id)
            except ObjectNotFoundError:
                raise OrderNotFound(order_id) from None

    def order_count(self) -> int:
        with ordering.domain_context():
            return current_domain.repository_for(Order)._dao.query.all().total
