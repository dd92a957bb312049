"""
Currency Converter Configuration Package

Contains configuration constants and defaults.
"""

from currency_converter.config.currencies import (
    BASE_CURRENCY,
    DEFAULT_RATES,
)

__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_RATES",
]
