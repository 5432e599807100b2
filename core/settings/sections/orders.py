from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrderSettings(BaseSettings):
    """Order workflow settings (ORDER_ prefix)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ORDER_",
        extra="ignore",
    )

    default_shipping_cost: Decimal = Field(default=Decimal("0.00"), ge=0)
    number_prefix: str = Field(default="ORD", pattern=r"^[A-Z]{2,10}$")
    page_size_limit: int = 1000
