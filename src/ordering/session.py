"""Shopper sessions: one checkout flow and one submission guard per session key.

Carts live in the ShoppingCart repository. The registry only tracks the
in-progress checkout of each session, and a session is opened by the first
command that needs one. Reads never open a session.
"""

import threading
from collections.abc import Callable
from contextlib import contextmanager
from datetime import UTC, datetime

import structlog

from ordering.checkout.flow import CheckoutFlow
from shared.exceptions import InvalidOperationError

logger = structlog.get_logger(__name__)

CheckoutFactory = Callable[[str], CheckoutFlow]


class ShopperSession:
    def __init__(self, session_id: str, checkout_factory: CheckoutFactory) -> None:
        self.session_id = session_id
        self._checkout_factory = checkout_factory
        self.checkout = checkout_factory(session_id)
        self.opened_at = datetime.now(UTC)
        self._submitting = threading.Lock()

    def restart_checkout(self) -> CheckoutFlow:
        self.checkout = self._checkout_factory(self.session_id)
        return self.checkout

    def active_checkout(self) -> CheckoutFlow:
        """The current checkout, or a fresh one once the last has completed."""
        if self.checkout.is_completed:
            return self.restart_checkout()
        return self.checkout

    @property
    def is_submitting(self) -> bool:
        return self._submitting.locked()

    @contextmanager
    def submission(self):
        """Hold the session's only submission slot; a second caller is turned away."""
        if not self._submitting.acquire(blocking=False):
            logger.warning("Concurrent submission rejected", session_id=self.session_id)
            raise InvalidOperationError("Submission already in progress")
        try:
            yield self
        finally:
            self._submitting.release()


class SessionRegistry:
    def __init__(self, checkout_factory: CheckoutFactory) -> None:
        self._checkout_factory = checkout_factory
        self._sessions: dict[str, ShopperSession] = {}
        self._lock = threading.Lock()

    def open(self, session_id: str) -> ShopperSession:
        """Return the live session, starting one on first use."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = ShopperSession(session_id, self._checkout_factory)
                self._sessions[session_id] = session
                logger.info("Session opened", session_id=session_id)
            return session

    def get(self, session_id: str) -> ShopperSession | None:
        return self._sessions.get(session_id)

    def end(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        logger.info("Session closed", session_id=session_id, was_open=session is not None)
        return session is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
