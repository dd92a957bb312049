"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest
import pytest_asyncio

from currency_converter.config.currencies import DEFAULT_RATES
from currency_converter.converter import Converter
from currency_converter.database import Database
from currency_converter.rates import DatabaseRateTable, StaticRateTable
from currency_converter.service import ConversionService

TEST_RATES = {
    "INR": 1.0,
    "USD": 84.08,
    "EUR": 91.51,
}


@pytest.fixture
def rate_table():
    """Static table with the reference rates (INR base)."""
    return StaticRateTable(TEST_RATES, base_currency="INR")


@pytest.fixture
def converter(rate_table):
    return Converter(rate_table)


@pytest.fixture
def service(converter):
    return ConversionService(converter)


@pytest_asyncio.fixture
async def temp_db():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    db = Database(db_path)
    await db.connect()

    yield db

    # Cleanup
    await db.close()
    db.remove_from_cache()
    if os.path.exists(db_path):
        os.unlink(db_path)
    # Also clean up WAL files
    for ext in ["-wal", "-shm"]:
        wal_path = db_path + ext
        if os.path.exists(wal_path):
            os.unlink(wal_path)


@pytest_asyncio.fixture
async def seeded_db(temp_db):
    """Temporary database holding the default rates."""
    await temp_db.set_rates(DEFAULT_RATES)
    return temp_db


@pytest.fixture
def db_rate_table(seeded_db):
    return DatabaseRateTable(seeded_db, base_currency="INR")
