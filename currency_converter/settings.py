"""Configuration management for the currency converter service."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from currency_converter.config.currencies import BASE_CURRENCY
from currency_converter.version import VERSION


class Settings(BaseSettings):
    """Service configuration, overridable via CURRENCY_CONVERTER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CURRENCY_CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "currency-converter"
    version: str = VERSION
    host: str = "0.0.0.0"  # nosec B104 - service needs to bind to all interfaces
    port: int = 50051
    http_port: int = 8000
    log_level: str = "INFO"
    max_workers: int = 10

    # Rate table
    base_currency: str = BASE_CURRENCY
    rate_source: Literal["static", "database"] = "static"
    rates_file: Optional[Path] = None  # YAML rates for the static table
    database_path: Path = Path("data/rates.db")
    cache_rates: bool = False  # Load the database once at startup instead of per lookup
    seed_default_rates: bool = True  # Insert built-in rates missing from the database

    # Deadline applied when a caller sends none (seconds, None = unbounded)
    request_timeout_seconds: Optional[float] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get service settings.

    Returns:
        Settings instance (cached singleton)
    """
    return Settings()
