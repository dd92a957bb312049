#!/usr/bin/env python3
"""
CurrencyConverter gRPC client.

Usage:
    async with CurrencyConverterClient('localhost:50051') as client:
        inr = await client.convert(100, 'USD', 'INR', timeout=1.0)

From the command line:
    currency-converter-client --amount 100 --source USD --target INR
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

import grpc

from currency_converter import contracts

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS = "localhost:50051"
DEFAULT_TIMEOUT = 1.0


class CurrencyConverterClient:
    """Thin async wrapper around the CurrencyConverter stub."""

    def __init__(self, address: str = DEFAULT_ADDRESS, channel: Optional[grpc.aio.Channel] = None):
        self.address = address
        self._channel = channel or grpc.aio.insecure_channel(address)
        self._stub = contracts.CurrencyConverterStub(self._channel)

    async def convert(
        self,
        amount: float,
        source_currency: str = "",
        target_currency: str = "",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> float:
        """
        Convert an amount on the server.

        Raises:
            grpc.aio.AioRpcError: NOT_FOUND for unknown currencies,
                UNAVAILABLE when the rate store is down,
                DEADLINE_EXCEEDED when the timeout elapses
        """
        request = contracts.ConvertRequest(
            amount=amount,
            source_currency=source_currency,
            target_currency=target_currency,
        )
        response = await self._stub.Convert(request, timeout=timeout)
        return response.converted_amount

    async def close(self) -> None:
        await self._channel.close()

    async def __aenter__(self) -> "CurrencyConverterClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def run(args: argparse.Namespace) -> int:
    async with CurrencyConverterClient(args.address) as client:
        try:
            converted = await client.convert(
                args.amount, args.source, args.target, timeout=args.timeout
            )
        except grpc.aio.AioRpcError as e:
            logger.error(f"could not convert: {e.code().name}: {e.details()}")
            return 1

    logger.info(f"Converted Amount: {converted:f}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Convert an amount with the CurrencyConverter service")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="Server address (host:port)")
    parser.add_argument("--amount", type=float, default=100.0, help="Amount to convert")
    parser.add_argument("--source", default="USD", help="Source currency code (empty = base)")
    parser.add_argument("--target", default="INR", help="Target currency code (empty = base)")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Deadline in seconds")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
