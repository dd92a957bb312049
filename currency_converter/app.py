"""
Currency converter REST API - FastAPI entry point.

Usage:
    uvicorn currency_converter.app:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from currency_converter.api import router
from currency_converter.bootstrap import create_service
from currency_converter.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the rate table on startup, release the rate store on shutdown."""
        service, db = await create_service(settings)
        app.state.settings = settings
        app.state.service = service
        logger.info(f"{settings.service_name} REST API ready")
        try:
            yield
        finally:
            if db is not None:
                await db.close()
            logger.info(f"{settings.service_name} REST API shutting down")

    app = FastAPI(
        title="Currency Converter",
        description="Converts amounts between currencies via a base currency",
        version=settings.version,
        lifespan=lifespan,
    )
    app.include_router(router, tags=["conversion"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from currency_converter.bootstrap import configure_logging

    _settings = get_settings()
    configure_logging(_settings)
    uvicorn.run(
        "currency_converter.app:app",
        host=_settings.host,
        port=_settings.http_port,
        log_level=_settings.log_level.lower(),
    )
