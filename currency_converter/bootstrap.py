"""Startup wiring shared by the gRPC server and the REST app."""

import logging
from typing import Optional

from currency_converter.config.currencies import BASE_CURRENCY, DEFAULT_RATES
from currency_converter.converter import Converter
from currency_converter.database import Database
from currency_converter.rates import (
    DatabaseRateTable,
    RateTable,
    StaticRateTable,
    load_rates_file,
)
from currency_converter.service import ConversionService
from currency_converter.settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging for a process entry point."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def build_rate_table(settings: Settings) -> tuple[RateTable, Optional[Database]]:
    """
    Build the rate table described by the settings.

    Returns:
        The rate table and, for the database source, the connected database
        (the caller owns closing it)

    Raises:
        ValueError: If the configured base currency is not in the rates with rate 1.0
    """
    if settings.rate_source == "static":
        if settings.rates_file is not None:
            table = load_rates_file(settings.rates_file, base_currency=settings.base_currency)
        elif settings.base_currency != BASE_CURRENCY:
            raise ValueError(
                f"Built-in rates use base currency {BASE_CURRENCY}; set rates_file for "
                f"base currency {settings.base_currency}"
            )
        else:
            table = StaticRateTable(DEFAULT_RATES, base_currency=BASE_CURRENCY)
        logger.info(f"Using static rate table with base currency {table.base_currency}")
        return table, None

    db = Database(str(settings.database_path))
    await db.connect()
    try:
        if settings.seed_default_rates:
            if settings.base_currency == BASE_CURRENCY:
                await db.seed_rates(DEFAULT_RATES)
            else:
                logger.warning(
                    f"Not seeding built-in {BASE_CURRENCY} rates into a "
                    f"{settings.base_currency}-based database"
                )

        db_table = DatabaseRateTable(db, base_currency=settings.base_currency)
        if settings.cache_rates:
            return await db_table.snapshot(), db

        await db_table.verify_base()
    except Exception:
        await db.close()
        raise

    logger.info(f"Using database rate table at {settings.database_path}")
    return db_table, db


async def create_service(settings: Settings) -> tuple[ConversionService, Optional[Database]]:
    """Create the conversion service and its rate store."""
    table, db = await build_rate_table(settings)
    service = ConversionService(
        Converter(table), default_timeout=settings.request_timeout_seconds
    )
    return service, db
