"""Carrier shipping rates.

A selected carrier rate replaces the default free-over-$50 / flat-fee rule.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class Carrier(Enum):
    STANDARD = "standard"
    EXPEDITED = "expedited"
    OVERNIGHT = "overnight"


_BASE_RATES = {
    Carrier.STANDARD: Decimal("5.99"),
    Carrier.EXPEDITED: Decimal("12.99"),
    Carrier.OVERNIGHT: Decimal("24.99"),
}

_ESTIMATED_DAYS = {
    Carrier.STANDARD: 5,
    Carrier.EXPEDITED: 2,
    Carrier.OVERNIGHT: 1,
}

PER_LINE_SURCHARGE = Decimal("0.50")


class ShippingRate(BaseModel):
    carrier: Carrier
    rate: Decimal
    estimated_days: int
    service: str

    model_config = {"frozen": True}


def quote(carrier: Carrier, line_count: int) -> ShippingRate:
    """Rate for one carrier: base rate plus a surcharge per distinct cart line."""
    carrier = Carrier(carrier)
    return ShippingRate(
        carrier=carrier,
        rate=_BASE_RATES[carrier] + PER_LINE_SURCHARGE * max(line_count, 0),
        estimated_days=_ESTIMATED_DAYS[carrier],
        service=f"{carrier.value}_shipping",
    )


def quote_all(line_count: int) -> list[ShippingRate]:
    return [quote(carrier, line_count) for carrier in Carrier]
