"""Pydantic models for the currency converter REST API."""

from pydantic import BaseModel, ConfigDict, Field


class ConvertRequest(BaseModel):
    """Request to convert an amount. Omitted currencies mean the base currency."""

    model_config = ConfigDict(populate_by_name=True)

    amount: float
    source_currency: str = Field(default="", alias="sourceCurrency")
    target_currency: str = Field(default="", alias="targetCurrency")


class ConvertResponse(BaseModel):
    """Converted amount."""

    model_config = ConfigDict(populate_by_name=True)

    converted_amount: float = Field(..., alias="convertedAmount")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    base_currency: str
    rate_source: str
