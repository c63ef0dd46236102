"""Checkout form state and per-step validation.

Forms accept whatever the shopper typed; nothing is rejected at construction
time. Validation returns field-attributed messages so each problem can be
shown next to its input.
"""

import re

from pydantic import BaseModel, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
CARD_NUMBER_PATTERN = re.compile(r"^\d{16}$")
CVV_PATTERN = re.compile(r"^\d{3,4}$")
_WHITESPACE = re.compile(r"\s+")


class ShippingInfo(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    apartment: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "US"

    model_config = {"frozen": True}


class PaymentInfo(BaseModel):
    card_number: str = Field(default="", repr=False)
    expiry_month: str = ""
    expiry_year: str = ""
    cvv: str = Field(default="", repr=False)
    name_on_card: str = ""
    billing_address: str = ""
    billing_city: str = ""
    billing_state: str = ""
    billing_zip_code: str = ""
    same_as_shipping: bool = True

    model_config = {"frozen": True}

    @property
    def card_digits(self) -> str:
        return _WHITESPACE.sub("", self.card_number)

    @property
    def card_last4(self) -> str:
        return self.card_digits[-4:]


def _blank(value: str) -> bool:
    return not value or not value.strip()


def validate_shipping(info: ShippingInfo) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}

    required = {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "address": "Address is required",
        "city": "City is required",
        "state": "State is required",
    }
    for field, message in required.items():
        if _blank(getattr(info, field)):
            errors[field] = [message]

    if _blank(info.email):
        errors["email"] = ["Email is required"]
    elif not EMAIL_PATTERN.fullmatch(info.email):
        errors["email"] = ["Email is invalid"]

    if _blank(info.zip_code):
        errors["zip_code"] = ["ZIP code is required"]
    elif not ZIP_CODE_PATTERN.fullmatch(info.zip_code):
        errors["zip_code"] = ["Invalid ZIP code"]

    return errors


def validate_payment(info: PaymentInfo) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}

    if _blank(info.card_number):
        errors["card_number"] = ["Card number is required"]
    elif not CARD_NUMBER_PATTERN.fullmatch(info.card_digits):
        errors["card_number"] = ["Invalid card number"]

    if _blank(info.expiry_month):
        errors["expiry_month"] = ["Expiry month is required"]
    if _blank(info.expiry_year):
        errors["expiry_year"] = ["Expiry year is required"]

    if _blank(info.cvv):
        errors["cvv"] = ["CVV is required"]
    elif not CVV_PATTERN.fullmatch(info.cvv):
        errors["cvv"] = ["Invalid CVV"]

    if _blank(info.name_on_card):
        errors["name_on_card"] = ["Name on card is required"]

    if not info.same_as_shipping:
        billing = {
            "billing_address": "Billing address is required",
            "billing_city": "Billing city is required",
            "billing_state": "Billing state is required",
            "billing_zip_code": "Billing ZIP code is required",
        }
        for field, message in billing.items():
            if _blank(getattr(info, field)):
                errors[field] = [message]

    return errors
