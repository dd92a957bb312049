"""
Currency Converter - converts amounts between currencies via a base currency.

Usage:
    from currency_converter import Converter, StaticRateTable

    converter = Converter(StaticRateTable.default())
    inr = await converter.convert(100, 'USD', 'INR')  # 8408.0

    # Database-backed rates
    db = Database('data/rates.db')
    await db.connect()
    converter = Converter(DatabaseRateTable(db))
"""

from currency_converter.converter import Converter, convert_amount
from currency_converter.database import Database
from currency_converter.errors import (
    BackingStoreUnavailable,
    ConversionError,
    DeadlineExceeded,
    RateNotFound,
)
from currency_converter.rates import (
    DatabaseRateTable,
    RateTable,
    StaticRateTable,
    load_rates_file,
)
from currency_converter.service import ConversionRequest, ConversionResult, ConversionService
from currency_converter.settings import Settings
from currency_converter.version import VERSION

__all__ = [
    "Converter",
    "convert_amount",
    "Database",
    "RateTable",
    "StaticRateTable",
    "DatabaseRateTable",
    "load_rates_file",
    "ConversionService",
    "ConversionRequest",
    "ConversionResult",
    "Settings",
    # Errors
    "ConversionError",
    "RateNotFound",
    "BackingStoreUnavailable",
    "DeadlineExceeded",
    "VERSION",
]
