"""CurrencyConverter gRPC server entrypoint."""

import asyncio
import logging
import signal
from concurrent import futures
from typing import Optional

import grpc

from currency_converter import contracts
from currency_converter.bootstrap import configure_logging, create_service
from currency_converter.grpc_servicer import CurrencyConverterServicer
from currency_converter.service import ConversionService
from currency_converter.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_server(service: ConversionService, max_workers: int = 10) -> grpc.aio.Server:
    """Create a gRPC server with the CurrencyConverter servicer registered."""
    server = grpc.aio.server(futures.ThreadPoolExecutor(max_workers=max_workers))
    contracts.add_CurrencyConverterServicer_to_server(CurrencyConverterServicer(service), server)
    return server


async def serve(settings: Optional[Settings] = None):
    """Start the gRPC server and block until it terminates."""
    settings = settings or get_settings()
    service, db = await create_service(settings)

    try:
        server = create_server(service, max_workers=settings.max_workers)

        address = f"{settings.host}:{settings.port}"
        server.add_insecure_port(address)

        logger.info(f"Starting {settings.service_name} on {address}")
        await server.start()
        logger.info("Server listening")

        async def shutdown(sig):
            logger.info(f"Received signal {sig}, shutting down...")
            await server.stop(grace=5)
            logger.info("Server stopped")

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(shutdown(s)))

        await server.wait_for_termination()
    finally:
        if db is not None:
            await db.close()


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
