"""Tests for the pricing pipeline: subtotal, tax, shipping, discount, total."""

from decimal import Decimal

import pytest
from catalogue.product.product import Product
from ordering.cart.snapshot import CartLine, CartSnapshot
from ordering.coupon.engine import CouponEngine
from ordering.pricing.calculator import PricingCalculator
from ordering.pricing.money import to_cents, to_decimal
from ordering.pricing.shipping import Carrier, quote, quote_all


@pytest.fixture()
def calculator():
    return PricingCalculator(CouponEngine())


def _entry(price, quantity=1, product_id="p-1"):
    product = Product(id=product_id, name="Item", price=price, category="home", stock=100)
    return CartLine(product=product, quantity=quantity)


def _line_for(product, quantity=1):
    return CartLine(product=product, quantity=quantity)


class TestMoney:
    def test_to_decimal_avoids_float_noise(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_to_cents_rounds_half_up(self):
        assert to_cents(Decimal("7.1992")) == Decimal("7.20")
        assert to_cents(Decimal("0.125")) == Decimal("0.13")
        assert to_cents(Decimal("79.1912")) == Decimal("79.19")


class TestShippingRule:
    def test_free_over_threshold(self, calculator):
        assert calculator.shipping(Decimal("50.01")) == Decimal("0")

    def test_flat_fee_at_threshold(self, calculator):
        assert calculator.shipping(Decimal("50")) == Decimal("9.99")

    def test_flat_fee_below_threshold(self, calculator):
        assert calculator.shipping(Decimal("10")) == Decimal("9.99")

    def test_carrier_rate_replaces_rule(self, calculator):
        rate = quote(Carrier.EXPEDITED, 2)
        assert calculator.shipping(Decimal("500"), rate) == Decimal("13.99")


class TestCarrierQuotes:
    def test_quote_adds_per_line_surcharge(self):
        rate = quote(Carrier.STANDARD, 3)
        assert rate.rate == Decimal("7.49")
        assert rate.estimated_days == 5
        assert rate.service == "standard_shipping"

    def test_quote_accepts_carrier_value(self):
        assert quote("overnight", 0).rate == Decimal("24.99")

    def test_quote_all(self):
        rates = quote_all(1)
        assert [rate.carrier for rate in rates] == [Carrier.STANDARD, Carrier.EXPEDITED, Carrier.OVERNIGHT]
        assert [rate.estimated_days for rate in rates] == [5, 2, 1]


class TestCalculate:
    def test_holiday_sweater_scenario(self, calculator):
        coupon = calculator.coupon_engine.validate("HOLIDAY20", Decimal("89.99"))
        breakdown = calculator.calculate([_entry("89.99")], coupon=coupon)

        assert breakdown.subtotal == Decimal("89.99")
        assert breakdown.tax == Decimal("7.1992")
        assert breakdown.shipping == Decimal("0")
        assert breakdown.discount == Decimal("17.998")
        assert breakdown.total == Decimal("79.1912")

        rounded = breakdown.rounded()
        assert rounded.tax == Decimal("7.20")
        assert rounded.discount == Decimal("18.00")
        assert rounded.total == Decimal("79.19")

    def test_total_identity(self, calculator):
        breakdown = calculator.calculate([_entry("12.34", 3), _entry("5.55", 2, "p-2")])
        assert breakdown.total == breakdown.subtotal + breakdown.tax + breakdown.shipping - breakdown.discount

    def test_small_order_pays_flat_shipping(self, calculator):
        breakdown = calculator.calculate([_entry("20.00")])
        assert breakdown.subtotal == Decimal("20.00")
        assert breakdown.tax == Decimal("1.6000")
        assert breakdown.shipping == Decimal("9.99")
        assert breakdown.total == Decimal("31.5900")

    def test_empty_cart(self, calculator):
        breakdown = calculator.calculate([])
        assert breakdown.subtotal == Decimal("0")
        assert breakdown.total == Decimal("9.99")

    def test_carrier_recorded(self, calculator):
        rate = quote(Carrier.OVERNIGHT, 1)
        breakdown = calculator.calculate([_entry("60")], shipping_rate=rate)
        assert breakdown.shipping == Decimal("25.49")
        assert breakdown.carrier == "overnight"


class TestPriceCart:
    def test_applies_qualifying_coupon(self, calculator, sweater):
        cart = CartSnapshot(session_id="sess-001", lines=(_line_for(sweater),), coupon_code="HOLIDAY20")
        breakdown = calculator.price_cart(cart)
        assert breakdown.coupon_code == "HOLIDAY20"
        assert breakdown.rounded().total == Decimal("79.19")

    def test_ignores_coupon_the_cart_no_longer_qualifies_for(self, calculator, catalog):
        cart = CartSnapshot(session_id="sess-001", lines=(_line_for(catalog.get("12")),), coupon_code="HOLIDAY20")
        breakdown = calculator.price_cart(cart)
        assert breakdown.discount == Decimal("0")
        assert breakdown.coupon_code is None

    def test_snapshot_without_coupon(self, calculator, sweater):
        cart = CartSnapshot(session_id="sess-001", lines=(_line_for(sweater),))
        assert calculator.price_cart(cart).discount == Decimal("0")
