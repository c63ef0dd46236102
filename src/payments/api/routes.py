"""FastAPI routes for the Payments domain."""

from fastapi import APIRouter, Depends, HTTPException

from payments.api.schemas import ConfigureGatewayRequest, GatewayConfigResponse
from payments.gateway import SimulatedGateway
from shared.dependencies import get_storefront

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest, storefront=Depends(get_storefront)) -> GatewayConfigResponse:
    """Configure the SimulatedGateway behavior (non-production only).

    Lets manual testers force every authorization to succeed or fail.
    """
    if storefront.settings.is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = storefront.gateway
    if not isinstance(gateway, SimulatedGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for SimulatedGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
        decline_rate=gateway.decline_rate,
    )
