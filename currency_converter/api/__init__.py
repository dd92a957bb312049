"""REST API for the currency converter."""

from currency_converter.api.routes import router

__all__ = ["router"]
