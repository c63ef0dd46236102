"""Payment gateway factory.

The storefront composition root builds one gateway per application and hands
it to every checkout flow.
"""

from payments.gateway.port import AuthorizationResult, PaymentGateway
from payments.gateway.simulated_adapter import SimulatedGateway


def build_gateway(settings) -> PaymentGateway:
    """Return the gateway for the given settings. Always simulated for now."""
    return SimulatedGateway(decline_rate=settings.decline_rate)


__all__ = ["AuthorizationResult", "PaymentGateway", "SimulatedGateway", "build_gateway"]
