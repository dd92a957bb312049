"""
Rate tables - exchange rates relative to a single base currency.

Usage:
    table = StaticRateTable(DEFAULT_RATES, base_currency='INR')
    rate = await table.lookup('USD')  # None on a miss

    db = Database('data/rates.db')
    await db.connect()
    table = DatabaseRateTable(db, base_currency='INR')
    cached = await table.snapshot()  # StaticRateTable built from every row

Lookups are exact, case-sensitive matches. A code that is not in the table
is a miss (None), never a zero rate or a default.
"""

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import aiosqlite
import yaml  # type: ignore[import-untyped]

from currency_converter.config.currencies import BASE_CURRENCY, DEFAULT_RATES
from currency_converter.database import Database
from currency_converter.errors import BackingStoreUnavailable

logger = logging.getLogger(__name__)


class RateTable(ABC):
    """Read-only lookup of currency code -> rate against the base currency."""

    base_currency: str

    @abstractmethod
    async def lookup(self, code: str) -> Optional[float]:
        """Return the rate for ``code``, or None if the code is unknown."""


class StaticRateTable(RateTable):
    """In-memory rate table, fixed at construction."""

    def __init__(self, rates: Mapping[str, float], base_currency: str = BASE_CURRENCY):
        validated = {}
        for code, rate in rates.items():
            rate = float(rate)
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"Rate for {code} must be a positive finite number, got {rate}")
            validated[code] = rate

        if validated.get(base_currency) != 1.0:
            raise ValueError(f"Base currency {base_currency} must be present with rate 1.0")

        self.base_currency = base_currency
        self._rates = MappingProxyType(validated)

    @property
    def rates(self) -> Mapping[str, float]:
        return self._rates

    async def lookup(self, code: str) -> Optional[float]:
        return self._rates.get(code)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"StaticRateTable(base_currency={self.base_currency!r}, currencies={sorted(self._rates)})"

    @classmethod
    def default(cls) -> "StaticRateTable":
        """Built-in table from config constants."""
        return cls(DEFAULT_RATES, base_currency=BASE_CURRENCY)


class DatabaseRateTable(RateTable):
    """Rate table that queries the database on every lookup."""

    def __init__(self, db: Database, base_currency: str = BASE_CURRENCY):
        self._db = db
        self.base_currency = base_currency

    async def lookup(self, code: str) -> Optional[float]:
        try:
            return await self._db.get_rate(code)
        except (aiosqlite.Error, RuntimeError) as e:
            logger.error(f"Error retrieving rate for {code}: {e}")
            raise BackingStoreUnavailable(f"rate store unavailable while looking up {code}") from e

    async def verify_base(self) -> None:
        """
        Check the stored base row once, before serving lookups.

        Raises:
            ValueError: If the base currency is missing or its rate is not 1.0
            BackingStoreUnavailable: If the store cannot be queried
        """
        rate = await self.lookup(self.base_currency)
        if rate != 1.0:
            raise ValueError(
                f"Base currency {self.base_currency} must be present with rate 1.0, got {rate}"
            )

    async def snapshot(self) -> StaticRateTable:
        """Load every stored rate once into an immutable in-memory table."""
        try:
            rates = await self._db.get_all_rates()
        except (aiosqlite.Error, RuntimeError) as e:
            logger.error(f"Error loading rates: {e}")
            raise BackingStoreUnavailable("rate store unavailable while loading rates") from e
        table = StaticRateTable(rates, base_currency=self.base_currency)
        logger.info(f"Loaded {len(table)} rate(s) from {self._db.path}")
        return table


def load_rates_file(
    path: Union[str, Path], base_currency: Optional[str] = None
) -> StaticRateTable:
    """
    Build a static table from a YAML rates file.

    Expected layout:

        base_currency: INR
        rates:
          INR: 1.0
          USD: 84.08

    Args:
        path: Path to the YAML file
        base_currency: Expected base currency. Used when the file names none;
            a file naming a different base is rejected

    Returns:
        StaticRateTable holding the file's rates

    Raises:
        ValueError: If the file does not have the expected layout or its
            base currency differs from ``base_currency``
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    rates = data.get("rates")
    if not isinstance(rates, dict) or not rates:
        raise ValueError(f"Rates file {path} must contain a non-empty 'rates' mapping")
    file_base = data.get("base_currency")
    if base_currency is not None and file_base is not None and file_base != base_currency:
        raise ValueError(
            f"Rates file {path} uses base currency {file_base}, expected {base_currency}"
        )
    base = file_base or base_currency or BASE_CURRENCY

    table = StaticRateTable(rates, base_currency=base)
    logger.info(f"Loaded {len(table)} rate(s) from {path}")
    return table
