"""Environment-driven settings for the storefront."""

import os

from pydantic import BaseModel, Field

ENVIRONMENTS = ("development", "test", "staging", "production")


class Settings(BaseModel):
    env: str = "development"
    log_level: str | None = None
    log_dir: str | None = None
    payment_delay: float = Field(default=1.5, ge=0.0)
    delivery_days: int = Field(default=5, ge=0)
    decline_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def load_settings(environ=None) -> Settings:
    """Build settings from environment variables.

    Unknown environments fall back to ``development``.
    """
    environ = os.environ if environ is None else environ

    env = environ.get("STOREFRONT_ENV", "development").lower()
    if env not in ENVIRONMENTS:
        env = "development"

    values = {
        "env": env,
        "log_level": environ.get("LOG_LEVEL"),
        "log_dir": environ.get("STOREFRONT_LOG_DIR"),
    }
    if "STOREFRONT_PAYMENT_DELAY" in environ:
        values["payment_delay"] = environ["STOREFRONT_PAYMENT_DELAY"]
    if "STOREFRONT_DELIVERY_DAYS" in environ:
        values["delivery_days"] = environ["STOREFRONT_DELIVERY_DAYS"]
    if "STOREFRONT_DECLINE_RATE" in environ:
        values["decline_rate"] = environ["STOREFRONT_DECLINE_RATE"]

    return Settings(**values)
