"""gRPC servicer implementation for the CurrencyConverter service."""

import logging

import grpc

from currency_converter import contracts
from currency_converter.errors import BackingStoreUnavailable, DeadlineExceeded, RateNotFound
from currency_converter.service import ConversionRequest, ConversionService

logger = logging.getLogger(__name__)


class CurrencyConverterServicer(contracts.CurrencyConverterServicer):
    """
    gRPC servicer for the CurrencyConverter service.

    Implements the Convert RPC by delegating to ConversionService and maps
    each failure kind to its own status code.
    """

    def __init__(self, service: ConversionService):
        """Initialize servicer with the conversion service it fronts."""
        self.service = service

    async def Convert(self, request, context):
        """Convert an amount between two currencies."""
        conversion = ConversionRequest(
            amount=request.amount,
            source_currency=request.source_currency,
            target_currency=request.target_currency,
        )

        try:
            result = await self.service.convert(conversion, timeout=context.time_remaining())
        except RateNotFound as e:
            await context.abort(grpc.StatusCode.NOT_FOUND, str(e))
        except BackingStoreUnavailable as e:
            await context.abort(grpc.StatusCode.UNAVAILABLE, str(e))
        except DeadlineExceeded as e:
            await context.abort(grpc.StatusCode.DEADLINE_EXCEEDED, str(e))

        return contracts.ConvertResponse(converted_amount=result.converted_amount)
