"""FastAPI dependencies for the currency converter routes."""

from fastapi import Request

from currency_converter.service import ConversionService
from currency_converter.settings import Settings


def get_conversion_service(request: Request) -> ConversionService:
    """Conversion service created at startup."""
    return request.app.state.service


def get_app_settings(request: Request) -> Settings:
    """Settings the app was started with."""
    return request.app.state.settings
