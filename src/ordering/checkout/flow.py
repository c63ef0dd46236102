"""Checkout Flow: the three-step checkout state machine.

State Machine:
    SHIPPING_ENTRY → PAYMENT_ENTRY → REVIEW → SUBMITTING → COMPLETED
                                                        ↘ FAILED
    Backward: REVIEW → PAYMENT_ENTRY → SHIPPING_ENTRY, FAILED → PAYMENT_ENTRY
    Retry:    FAILED → SUBMITTING

Forward moves require the current step's form to validate. Entered data is
never discarded, neither on backward moves nor on failures, so a shopper can
correct a detail and retry. An Order is only created after the gateway has
authorized the payment. The flow prices and submits a cart snapshot handed
to it by the caller and never touches the stored cart; the caller empties
the cart once the flow has completed.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog
from protean.utils.globals import current_domain

from ordering.cart.snapshot import CartSnapshot
from ordering.checkout.forms import PaymentInfo, ShippingInfo, validate_payment, validate_shipping
from ordering.order.order import Order
from ordering.pricing.calculator import PriceBreakdown, PricingCalculator
from ordering.pricing.shipping import Carrier, ShippingRate, quote
from payments.gateway.port import PaymentGateway
from shared.exceptions import InvalidOperationError, PaymentDeclined, ValidationError

logger = structlog.get_logger(__name__)

CURRENCY = "USD"


class CheckoutStep(Enum):
    SHIPPING_ENTRY = "shipping_entry"
    PAYMENT_ENTRY = "payment_entry"
    REVIEW = "review"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


class FailureReason(Enum):
    PAYMENT_DECLINED = "payment_declined"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class CheckoutFailure:
    reason: FailureReason
    message: str


_VALID_TRANSITIONS = {
    CheckoutStep.SHIPPING_ENTRY: {CheckoutStep.PAYMENT_ENTRY},
    CheckoutStep.PAYMENT_ENTRY: {CheckoutStep.SHIPPING_ENTRY, CheckoutStep.REVIEW},
    CheckoutStep.REVIEW: {CheckoutStep.PAYMENT_ENTRY, CheckoutStep.SUBMITTING},
    CheckoutStep.SUBMITTING: {CheckoutStep.COMPLETED, CheckoutStep.FAILED},
    CheckoutStep.FAILED: {CheckoutStep.PAYMENT_ENTRY, CheckoutStep.SUBMITTING},
    CheckoutStep.COMPLETED: set(),  # Terminal
}

_PREVIOUS_STEP = {
    CheckoutStep.PAYMENT_ENTRY: CheckoutStep.SHIPPING_ENTRY,
    CheckoutStep.REVIEW: CheckoutStep.PAYMENT_ENTRY,
    CheckoutStep.FAILED: CheckoutStep.PAYMENT_ENTRY,
}

# Steps from which a submission may start
_SUBMITTABLE_STEPS = {CheckoutStep.REVIEW, CheckoutStep.FAILED}

# Steps in which the shipping carrier may still change
_EDITABLE_STEPS = {
    CheckoutStep.SHIPPING_ENTRY,
    CheckoutStep.PAYMENT_ENTRY,
    CheckoutStep.REVIEW,
    CheckoutStep.FAILED,
}


class CheckoutFlow:
    def __init__(
        self,
        session_id: str,
        pricing: PricingCalculator,
        gateway: PaymentGateway,
        processing_delay: float = 0.0,
        delivery_days: int = 5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session_id = session_id
        self.pricing = pricing
        self.gateway = gateway
        self.processing_delay = processing_delay
        self.delivery_days = delivery_days
        self._sleep = sleep

        self.step = CheckoutStep.SHIPPING_ENTRY
        self.shipping_info = ShippingInfo()
        self.payment_info = PaymentInfo()
        self.carrier: Carrier | None = None
        self.errors: dict[str, list[str]] = {}
        self.failure: CheckoutFailure | None = None
        self.order: Order | None = None
        self.attempts = 0

    @property
    def is_completed(self) -> bool:
        return self.step == CheckoutStep.COMPLETED

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _transition(self, target: CheckoutStep) -> None:
        if target not in _VALID_TRANSITIONS[self.step]:
            raise InvalidOperationError(f"Cannot move checkout from {self.step.value} to {target.value}")

        logger.info(
            "Checkout step changed",
            session_id=self.session_id,
            from_step=self.step.value,
            to_step=target.value,
        )
        self.step = target

    def _require(self, *steps: CheckoutStep) -> None:
        if self.step not in steps:
            raise InvalidOperationError(f"Action not allowed while checkout is in {self.step.value}")

    def _reject(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        logger.info(
            "Checkout step validation failed",
            session_id=self.session_id,
            step=self.step.value,
            fields=sorted(errors),
        )
        raise ValidationError(errors)

    def submit_shipping(self, info: ShippingInfo) -> CheckoutStep:
        """Record shipping details and move on to payment entry."""
        self._require(CheckoutStep.SHIPPING_ENTRY)
        self.shipping_info = info

        errors = validate_shipping(info)
        if errors:
            self._reject(errors)

        self.errors = {}
        self._transition(CheckoutStep.PAYMENT_ENTRY)
        return self.step

    def submit_payment(self, info: PaymentInfo) -> CheckoutStep:
        """Record payment details and move on to review."""
        self._require(CheckoutStep.PAYMENT_ENTRY)
        self.payment_info = info

        errors = validate_payment(info)
        if errors:
            self._reject(errors)

        self.errors = {}
        self._transition(CheckoutStep.REVIEW)
        return self.step

    def back(self) -> CheckoutStep:
        """Return to the previous step, keeping everything entered so far."""
        previous = _PREVIOUS_STEP.get(self.step)
        if previous is None:
            raise InvalidOperationError(f"Cannot go back from {self.step.value}")

        self.errors = {}
        self._transition(previous)
        return self.step

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def select_shipping_rate(self, carrier: Carrier | str) -> Carrier:
        self._require(*_EDITABLE_STEPS)
        self.carrier = Carrier(carrier)
        return self.carrier

    def clear_shipping_rate(self) -> None:
        self._require(*_EDITABLE_STEPS)
        self.carrier = None

    def shipping_rate(self, cart: CartSnapshot) -> ShippingRate | None:
        if self.carrier is None:
            return None
        return quote(self.carrier, cart.line_count)

    def quote(self, cart: CartSnapshot) -> PriceBreakdown:
        """Current price of the cart with its coupon and selected carrier."""
        return self.pricing.price_cart(cart, shipping_rate=self.shipping_rate(cart))

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def _validate_for_submission(self, cart: CartSnapshot) -> dict[str, list[str]]:
        errors = validate_shipping(self.shipping_info)
        errors.update(validate_payment(self.payment_info))
        if cart.is_empty:
            errors["cart"] = ["Cart is empty"]
        return errors

    def submit(self, cart: CartSnapshot) -> Order:
        """Authorize the payment for ``cart`` and record the order.

        Callers sharing a flow across threads must serialize submissions;
        the shopper session's submission guard does that for the storefront.

        Raises:
            InvalidOperationError: not in review/failed.
            ValidationError: the forms or the cart no longer validate; the
                flow stays where it was.
            CouponRejected: the cart's coupon no longer qualifies.
            PaymentDeclined: the gateway declined; the flow is left FAILED
                with all entered data intact.
        """
        self._require(*_SUBMITTABLE_STEPS)

        errors = self._validate_for_submission(cart)
        if errors:
            self._reject(errors)

        shipping_rate = self.shipping_rate(cart)
        coupon = None
        if cart.coupon_code:
            coupon = self.pricing.coupon_engine.validate(cart.coupon_code, cart.subtotal)
        pricing = self.pricing.calculate(cart.lines, coupon=coupon, shipping_rate=shipping_rate)

        self.errors = {}
        self.failure = None
        self.attempts += 1
        self._transition(CheckoutStep.SUBMITTING)

        log = logger.bind(session_id=self.session_id, attempt=self.attempts)
        log.info("Payment processing started", total=str(pricing.total), items_count=cart.line_count)

        try:
            if self.processing_delay:
                self._sleep(self.processing_delay)

            result = self.gateway.authorize(
                card_number=self.payment_info.card_digits,
                amount=pricing.total,
                currency=CURRENCY,
                idempotency_key=f"{self.session_id}:{self.attempts}",
            )
        except Exception:
            log.exception("Payment processing crashed")
            self._fail(FailureReason.INTERNAL_ERROR, "Payment processing failed unexpectedly")
            raise

        if not result.success:
            message = result.failure_reason or "Payment declined"
            self._fail(FailureReason.PAYMENT_DECLINED, message)
            raise PaymentDeclined(message)

        try:
            order = Order.create(
                session_id=self.session_id,
                lines=cart.lines,
                shipping_info=self.shipping_info,
                card_number=self.payment_info.card_digits,
                name_on_card=self.payment_info.name_on_card,
                pricing=pricing,
                transaction_id=result.transaction_id,
                delivery_days=shipping_rate.estimated_days if shipping_rate else self.delivery_days,
            )
            current_domain.repository_for(Order).add(order)
        except Exception:
            log.exception("Order creation failed after authorization", transaction_id=result.transaction_id)
            self._fail(FailureReason.INTERNAL_ERROR, "Order could not be created")
            raise

        self.order = order
        self._transition(CheckoutStep.COMPLETED)
        log.info("Order completed", order_id=order.id, total=str(pricing.total))
        return order

    def _fail(self, reason: FailureReason, message: str) -> None:
        self.failure = CheckoutFailure(reason=reason, message=message)
        self._transition(CheckoutStep.FAILED)
        logger.warning(
            "Checkout submission failed",
            session_id=self.session_id,
            reason=reason.value,
            message=message,
        )
