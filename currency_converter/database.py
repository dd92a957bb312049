"""
Database - Persistent store for exchange rates.

Usage:
    db = Database('data/rates.db')
    await db.connect()
    rate = await db.get_rate('USD')
    await db.set_rate('GBP', 105.2)
"""

import logging
import math
from pathlib import Path
from typing import Optional

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS conversion_rates (
    currency_code TEXT PRIMARY KEY,
    rate DOUBLE NOT NULL CHECK (rate > 0)
);
"""


class Database:
    """Single source of truth for rate storage."""

    _instances: dict[str, 'Database'] = {}  # path -> instance
    _default_path: str = None

    def __new__(cls, path: str = None):
        """
        Singleton pattern per path - one database instance per unique path.

        Args:
            path: Database file path. If None, uses default path.
        """
        if path is None:
            if cls._default_path is None:
                cls._default_path = str(Path(__file__).parent.parent / 'data' / 'rates.db')
            path = cls._default_path
        path = str(path)

        if path not in cls._instances:
            instance = super().__new__(cls)
            instance._path = Path(path)
            instance._connection = None
            cls._instances[path] = instance

        return cls._instances[path]

    def __init__(self, path: str = None):
        # Path is already set in __new__, nothing to do here
        pass

    @property
    def path(self) -> Path:
        return self._path

    async def connect(self) -> 'Database':
        """Connect to database and initialize schema."""
        if self._connection is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._path)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA journal_mode=WAL")
            await self._connection.execute("PRAGMA busy_timeout=30000")
            await self._init_schema()
            logger.info(f"Connected to rate database at {self._path}")
        return self

    async def close(self):
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def remove_from_cache(self):
        """Remove this instance from the singleton cache. Use for temporary databases."""
        path_str = str(self._path)
        if path_str in self._instances:
            del self._instances[path_str]

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get raw connection for advanced operations."""
        if not self._connection:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    # -------------------------------------------------------------------------
    # Rates
    # -------------------------------------------------------------------------

    async def get_rate(self, currency_code: str) -> Optional[float]:
        """Get the rate for a currency code, or None if there is no row."""
        cursor = await self.conn.execute(
            "SELECT rate FROM conversion_rates WHERE currency_code = ?", (currency_code,)
        )
        row = await cursor.fetchone()
        return float(row['rate']) if row else None

    async def get_all_rates(self) -> dict[str, float]:
        """Get every stored rate as a dictionary of currency -> rate."""
        cursor = await self.conn.execute("SELECT currency_code, rate FROM conversion_rates")
        rows = await cursor.fetchall()
        return {row['currency_code']: float(row['rate']) for row in rows}

    async def set_rate(self, currency_code: str, rate: float) -> None:
        """Insert or replace the rate for a currency code."""
        if not currency_code:
            raise ValueError("Currency code must not be empty")
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Rate for {currency_code} must be a positive finite number, got {rate}")
        await self.conn.execute(
            "INSERT OR REPLACE INTO conversion_rates (currency_code, rate) VALUES (?, ?)",
            (currency_code, float(rate))
        )
        await self.conn.commit()

    async def set_rates(self, rates: dict[str, float]) -> None:
        """Insert or replace several rates in one transaction."""
        for code, rate in rates.items():
            if not code:
                raise ValueError("Currency code must not be empty")
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"Rate for {code} must be a positive finite number, got {rate}")
        await self.conn.executemany(
            "INSERT OR REPLACE INTO conversion_rates (currency_code, rate) VALUES (?, ?)",
            [(code, float(rate)) for code, rate in rates.items()]
        )
        await self.conn.commit()

    async def delete_rate(self, currency_code: str) -> None:
        """Remove a currency from the table."""
        await self.conn.execute(
            "DELETE FROM conversion_rates WHERE currency_code = ?", (currency_code,)
        )
        await self.conn.commit()

    async def seed_rates(self, rates: dict[str, float]) -> int:
        """Insert rates that are not already stored. Returns how many were added."""
        existing = await self.get_all_rates()
        missing = {code: rate for code, rate in rates.items() if code not in existing}
        if missing:
            await self.set_rates(missing)
            logger.info(f"Seeded {len(missing)} default rate(s): {', '.join(sorted(missing))}")
        return len(missing)

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    async def _init_schema(self) -> None:
        """Initialize database schema."""
        await self.conn.executescript(SCHEMA)
        await self.conn.commit()
