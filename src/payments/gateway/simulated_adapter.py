"""Simulated payment gateway for the demo storefront.

No external calls are made. Authorization follows a small set of synthetic
rules:

- card numbers must be 16 digits once whitespace is stripped;
- cards whose digits at positions 5-8 contain ``000`` or equal ``1234`` are
  declined as issuer failures (a demo quirk, not a
  fraud rule);
- the gateway can be configured at runtime to decline everything, and can
  decline a random share of otherwise good payments.
"""

import random
import re
import time
from decimal import Decimal
from uuid import uuid4

import structlog

from payments.gateway.port import AuthorizationResult, PaymentGateway

logger = structlog.get_logger(__name__)

ISSUER_DECLINE_REASON = "Payment gateway error: Transaction declined by issuer"
INVALID_CARD_REASON = "Invalid card number format"
RANDOM_DECLINE_REASON = "Payment processing failed. Please check your payment details and try again."

_WHITESPACE = re.compile(r"\s+")


def normalize_card_number(card_number: str) -> str:
    return _WHITESPACE.sub("", card_number or "")


def is_issuer_declined(digits: str) -> bool:
    """The synthetic decline rule on digits 5-8."""
    middle = digits[4:8]
    return "000" in middle or middle == "1234"


class SimulatedGateway(PaymentGateway):
    """Configurable simulated payment gateway."""

    def __init__(self, decline_rate: float = 0.0, rng: random.Random | None = None) -> None:
        self.decline_rate = decline_rate
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self._rng = rng or random.Random()

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def authorize(
        self,
        card_number: str,
        amount: Decimal,
        currency: str,
        idempotency_key: str,
    ) -> AuthorizationResult:
        digits = normalize_card_number(card_number)
        if len(digits) != 16 or not digits.isdigit():
            return self._decline(INVALID_CARD_REASON, status="rejected", idempotency_key=idempotency_key)

        if is_issuer_declined(digits):
            return self._decline(ISSUER_DECLINE_REASON, idempotency_key=idempotency_key)

        if not self.should_succeed:
            return self._decline(self.failure_reason, idempotency_key=idempotency_key)

        if self.decline_rate and self._rng.random() < self.decline_rate:
            return self._decline(RANDOM_DECLINE_REASON, idempotency_key=idempotency_key)

        return AuthorizationResult(
            success=True,
            transaction_id=f"txn_{int(time.time() * 1000)}_{uuid4().hex[:9]}",
            status="completed",
        )

    def _decline(self, reason: str, idempotency_key: str, status: str = "declined") -> AuthorizationResult:
        logger.warning("Payment authorization declined", reason=reason, idempotency_key=idempotency_key)
        return AuthorizationResult(success=False, status=status, failure_reason=reason)
