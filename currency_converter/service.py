"""Transport-agnostic Convert endpoint.

Both the gRPC servicer and the REST routes delegate here, so deadlines and
the error taxonomy behave the same on every transport.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from currency_converter.converter import Converter
from currency_converter.errors import BackingStoreUnavailable, DeadlineExceeded, RateNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    """A single conversion request. Empty currency codes mean the base currency."""

    amount: float
    source_currency: str = ""
    target_currency: str = ""


@dataclass(frozen=True)
class ConversionResult:
    """Successful conversion outcome."""

    converted_amount: float


class ConversionService:
    """Runs conversions under the caller's deadline."""

    def __init__(self, converter: Converter, default_timeout: Optional[float] = None):
        self._converter = converter
        self._default_timeout = default_timeout

    @property
    def converter(self) -> Converter:
        return self._converter

    async def convert(
        self, request: ConversionRequest, timeout: Optional[float] = None
    ) -> ConversionResult:
        """
        Convert a request.

        Args:
            request: Amount and currency codes
            timeout: Seconds left before the caller's deadline. Falls back to
                the service default; no deadline when both are None.

        Returns:
            ConversionResult with the converted amount

        Raises:
            RateNotFound: A currency code is not in the rate table
            BackingStoreUnavailable: The rate store failed
            DeadlineExceeded: The deadline elapsed first
        """
        if timeout is None:
            timeout = self._default_timeout

        try:
            converted = await asyncio.wait_for(
                self._converter.convert(
                    request.amount, request.source_currency, request.target_currency
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Deadline exceeded converting {request.source_currency or '<base>'} -> "
                f"{request.target_currency or '<base>'}"
            )
            raise DeadlineExceeded(timeout)
        except RateNotFound as e:
            logger.info(f"Rejected conversion: {e}")
            raise
        except BackingStoreUnavailable as e:
            logger.error(f"Rate store failure: {e}")
            raise

        return ConversionResult(converted_amount=converted)
