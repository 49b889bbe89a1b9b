"""Storefront settings.

Values come from ``STOREFRONT_*`` environment variables or a ``.env`` file.
Defaults match a local deployment of the backend services.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"

    user_service_url: str = "http://localhost:8085"
    product_service_url: str = "http://localhost:8081"
    order_service_url: str = "http://localhost:8082"
    payment_service_url: str = "http://localhost:8083"

    # "fake" charges nothing and always completes; for offline demos only
    payment_gateway: Literal["http", "fake"] = "http"

    # Seconds; applied to every outbound HTTP call
    request_timeout: float = Field(default=10.0, gt=0)

    tax_rate: Decimal = Decimal("0.10")
    free_shipping_threshold: Decimal = Decimal("100")
    flat_shipping_fee: Decimal = Decimal("10")

    cart_storage_dir: Path = Path.home() / ".storefront" / "carts"

    # Rotating log files are written here when set; stderr only otherwise
    log_dir: Path | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
