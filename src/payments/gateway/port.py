"""Payment gateway port (abstract interface).

Checkout talks to this contract only, so the simulated gateway can be
swapped for a real one without touching the checkout flow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AuthorizationResult:
    """Result of a payment authorization attempt."""

    success: bool
    transaction_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def authorize(
        self,
        card_number: str,
        amount: Decimal,
        currency: str,
        idempotency_key: str,
    ) -> AuthorizationResult:
        """Authorize a card payment for ``amount``."""
        ...
