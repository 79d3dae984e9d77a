"""Runtime settings, read from ``STOREFRONT_*`` environment variables or a
``.env`` file in the working directory."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Path("data")
    currency: str = "USD"

    # Notification channel; without a URL notifications are only logged.
    notification_url: str | None = None
    notification_api_key: str | None = None
    notification_timeout: float = 10.0

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # Signed-in shopper; checkout is prefilled from it when an email is set.
    customer_email: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None

    @property
    def cart_file(self) -> Path:
        return self.data_dir / "cart.json"

    @property
    def store_file(self) -> Path:
        return self.data_dir / "store.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
