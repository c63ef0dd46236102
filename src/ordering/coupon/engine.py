"""Coupon Engine: coupon eligibility and discount computation."""

from collections.abc import Iterable
from decimal import Decimal

import structlog

from ordering.coupon.coupon import COUPONS, Coupon, CouponType
from ordering.pricing.money import to_decimal
from shared.exceptions import CouponRejected

logger = structlog.get_logger(__name__)


class CouponEngine:
    def __init__(self, coupons: Iterable[Coupon] = COUPONS) -> None:
        self._coupons = {coupon.code: coupon for coupon in coupons}

    def find(self, code: str) -> Coupon | None:
        """Case-insensitive lookup, regardless of validity."""
        return self._coupons.get(code.strip().upper())

    def validate(self, code: str, order_total: Decimal) -> Coupon:
        """Return the coupon if it may be applied to an order of ``order_total``.

        Raises ``CouponRejected`` when the code is unknown, the coupon is
        marked invalid, or the order is below its minimum.
        """
        coupon = self.find(code)
        if coupon is None or not coupon.valid:
            logger.info("Coupon rejected", coupon_code=code, reason="unknown_or_invalid")
            raise CouponRejected(code)

        if coupon.min_order is not None and to_decimal(order_total) < coupon.min_order:
            logger.info(
                "Coupon rejected",
                coupon_code=code,
                reason="below_minimum",
                order_total=str(order_total),
                min_order=str(coupon.min_order),
            )
            raise CouponRejected(code)

        return coupon

    def is_valid(self, code: str, order_total: Decimal) -> bool:
        try:
            self.validate(code, order_total)
        except CouponRejected:
            return False
        return True

    @staticmethod
    def calculate_discount(coupon: Coupon, order_total: Decimal) -> Decimal:
        order_total = to_decimal(order_total)
        if coupon.type == CouponType.FIXED:
            return min(coupon.discount, order_total)

        discount = order_total * coupon.discount / Decimal("100")
        if coupon.max_discount is not None:
            return min(discount, coupon.max_discount)
        return discount

    def available(self) -> list[Coupon]:
        """Coupons shown to shoppers: every valid one."""
        return [coupon for coupon in self._coupons.values() if coupon.valid]
