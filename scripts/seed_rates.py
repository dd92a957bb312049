#!/usr/bin/env python3
"""Seed the rate database with the built-in rates or rates from a YAML file."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from currency_converter.config.currencies import DEFAULT_RATES  # noqa: E402
from currency_converter.database import Database  # noqa: E402
from currency_converter.rates import load_rates_file  # noqa: E402
from currency_converter.settings import get_settings  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def seed(db_path: Path, rates: dict[str, float], replace: bool) -> None:
    """Write rates to the database."""
    db = Database(str(db_path))
    await db.connect()
    try:
        if replace:
            await db.set_rates(rates)
            logger.info(f"Wrote {len(rates)} rate(s) to {db_path}")
        else:
            added = await db.seed_rates(rates)
            logger.info(f"Added {added} new rate(s) to {db_path}")
    finally:
        await db.close()


def main():
    parser = argparse.ArgumentParser(description="Seed the conversion_rates table")
    parser.add_argument(
        "--database",
        type=Path,
        default=None,
        help="Database path (defaults to CURRENCY_CONVERTER_DATABASE_PATH)",
    )
    parser.add_argument(
        "--rates-file",
        type=Path,
        default=None,
        help="YAML rates file to load instead of the built-in rates",
    )
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Overwrite rates that are already stored",
    )
    args = parser.parse_args()

    db_path = args.database or get_settings().database_path
    if args.rates_file:
        rates = dict(load_rates_file(args.rates_file).rates)
    else:
        rates = dict(DEFAULT_RATES)

    asyncio.run(seed(db_path, rates, args.replace))


if __name__ == "__main__":
    main()
