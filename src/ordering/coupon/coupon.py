"""Coupon value object and the storefront's coupon catalog."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class CouponType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Coupon(BaseModel):
    """A named discount rule with an eligibility threshold and optional cap."""

    code: str = Field(min_length=1)
    discount: Decimal = Field(ge=0)
    type: CouponType
    min_order: Decimal | None = Field(default=None, ge=0)
    max_discount: Decimal | None = Field(default=None, ge=0)
    valid: bool = True

    model_config = {"frozen": True}

    @field_validator("code")
    @classmethod
    def code_is_upper_case(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def description(self) -> str:
        if self.type == CouponType.PERCENTAGE:
            text = f"{self.discount}% discount"
        else:
            text = f"${self.discount} discount"
        if self.min_order is not None:
            text += f" (min. order ${self.min_order})"
        return text


COUPONS = [
    Coupon(code="HOLIDAY20", discount="20", type=CouponType.PERCENTAGE, min_order="50", max_discount="25"),
    Coupon(code="WINTER10", discount="10", type=CouponType.FIXED, min_order="30"),
    Coupon(code="FESTIVE25", discount="25", type=CouponType.PERCENTAGE, min_order="100", max_discount="50"),
    Coupon(code="EXPIRED", discount="50", type=CouponType.PERCENTAGE, valid=False),
]
