"""
Converter - two-hop currency conversion over a rate table.

Usage:
    converter = Converter(StaticRateTable.default())
    inr = await converter.convert(100, 'USD', 'INR')

Every pair converts through the base currency (source -> base -> target),
so adding a currency only needs one new rate.
"""

import logging

from currency_converter.errors import RateNotFound
from currency_converter.rates import RateTable

logger = logging.getLogger(__name__)


def convert_amount(amount: float, source_rate: float, target_rate: float) -> float:
    """Convert to the base currency, then from the base to the target. No rounding."""
    base_amount = amount * source_rate
    return base_amount / target_rate


class Converter:
    """Converts amounts between currencies using an injected rate table."""

    def __init__(self, rate_table: RateTable):
        self._rate_table = rate_table

    @property
    def base_currency(self) -> str:
        return self._rate_table.base_currency

    async def convert(self, amount: float, source_currency: str, target_currency: str) -> float:
        """
        Convert ``amount`` from ``source_currency`` to ``target_currency``.

        Empty codes stand for the base currency. Both rates are looked up
        before anything is computed.

        Raises:
            RateNotFound: If either code is missing from the rate table
            BackingStoreUnavailable: If a persisted table cannot be queried
        """
        source_currency = source_currency or self.base_currency
        target_currency = target_currency or self.base_currency

        source_rate = await self._rate_table.lookup(source_currency)
        target_rate = await self._rate_table.lookup(target_currency)

        if source_rate is None or target_rate is None:
            missing = []
            if source_rate is None:
                missing.append(source_currency)
            if target_rate is None and target_currency not in missing:
                missing.append(target_currency)
            logger.warning(f"Conversion rate not found for {', '.join(missing)}")
            raise RateNotFound(missing)

        result = convert_amount(amount, source_rate, target_rate)
        logger.debug(f"Converted {amount} {source_currency} -> {result} {target_currency}")
        return result
