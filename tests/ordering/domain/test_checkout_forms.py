"""Tests for checkout form validation."""

import pytest
from ordering.checkout.forms import PaymentInfo, ShippingInfo, validate_payment, validate_shipping


class TestShippingValidation:
    def test_valid_shipping(self, shipping_info):
        assert validate_shipping(shipping_info) == {}

    def test_empty_form_reports_every_required_field(self):
        errors = validate_shipping(ShippingInfo())
        assert set(errors) == {"first_name", "last_name", "email", "address", "city", "state", "zip_code"}
        assert errors["first_name"] == ["First name is required"]

    def test_blank_is_treated_as_missing(self, shipping_info):
        errors = validate_shipping(shipping_info.model_copy(update={"city": "   "}))
        assert errors == {"city": ["City is required"]}

    def test_phone_and_apartment_are_optional(self, shipping_info):
        assert shipping_info.phone == ""
        assert validate_shipping(shipping_info) == {}

    def test_country_defaults_to_us(self):
        assert ShippingInfo().country == "US"

    @pytest.mark.parametrize("email", ["noel", "noel@example", "no el@example.com", "noel@@example.com"])
    def test_invalid_email(self, shipping_info, email):
        errors = validate_shipping(shipping_info.model_copy(update={"email": email}))
        assert errors == {"email": ["Email is invalid"]}

    @pytest.mark.parametrize("zip_code", ["99705", "99705-1234"])
    def test_valid_zip_codes(self, shipping_info, zip_code):
        assert validate_shipping(shipping_info.model_copy(update={"zip_code": zip_code})) == {}

    @pytest.mark.parametrize("zip_code", ["9970", "99705-12", "ABCDE", "99705\n"])
    def test_invalid_zip_codes(self, shipping_info, zip_code):
        errors = validate_shipping(shipping_info.model_copy(update={"zip_code": zip_code}))
        assert errors == {"zip_code": ["Invalid ZIP code"]}


class TestPaymentValidation:
    def test_valid_payment(self, payment_info):
        assert validate_payment(payment_info) == {}

    def test_card_number_whitespace_is_ignored(self, payment_info):
        assert payment_info.card_digits == "4242424242424242"
        assert payment_info.card_last4 == "4242"

    @pytest.mark.parametrize("card_number", ["4242", "4242 4242 4242 424X", "42424242424242424"])
    def test_invalid_card_number(self, payment_info, card_number):
        errors = validate_payment(payment_info.model_copy(update={"card_number": card_number}))
        assert errors == {"card_number": ["Invalid card number"]}

    @pytest.mark.parametrize("cvv", ["12", "12345", "abc"])
    def test_invalid_cvv(self, payment_info, cvv):
        errors = validate_payment(payment_info.model_copy(update={"cvv": cvv}))
        assert errors == {"cvv": ["Invalid CVV"]}

    def test_four_digit_cvv(self, payment_info):
        assert validate_payment(payment_info.model_copy(update={"cvv": "1234"})) == {}

    def test_missing_fields(self):
        errors = validate_payment(PaymentInfo())
        assert set(errors) == {"card_number", "expiry_month", "expiry_year", "cvv", "name_on_card"}

    def test_billing_address_required_when_not_same_as_shipping(self, payment_info):
        errors = validate_payment(payment_info.model_copy(update={"same_as_shipping": False}))
        assert set(errors) == {"billing_address", "billing_city", "billing_state", "billing_zip_code"}
        assert errors["billing_zip_code"] == ["Billing ZIP code is required"]

    def test_sensitive_fields_hidden_from_repr(self, payment_info):
        assert "4242 4242" not in repr(payment_info)
        assert "123" not in repr(payment_info)
