"""Pydantic request/response schemas for the Payments API."""

from pydantic import BaseModel


class ConfigureGatewayRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"should_succeed": False, "failure_reason": "Card declined"}]}}

    should_succeed: bool = True
    failure_reason: str = "Card declined"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
    decline_rate: float
