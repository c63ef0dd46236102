import pytest
from ordering.checkout.forms import PaymentInfo, ShippingInfo


@pytest.fixture()
def shipping_info():
    return ShippingInfo(
        first_name="Noel",
        last_name="Winters",
        email="noel@example.com",
        address="1 Snowflake Lane",
        city="North Pole",
        state="AK",
        zip_code="99705",
    )


@pytest.fixture()
def payment_info():
    return PaymentInfo(
        card_number="4242 4242 4242 4242",
        expiry_month="12",
        expiry_year="2030",
        cvv="123",
        name_on_card="Noel Winters",
    )


@pytest.fixture()
def declined_payment_info(payment_info):
    """Digits 5-8 are 0001, which the simulated issuer always declines."""
    return payment_info.model_copy(update={"card_number": "4242 0001 4242 4242"})


@pytest.fixture()
def sweater(catalog):
    return catalog.get("1")
