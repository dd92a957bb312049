"""REST API routes for the currency converter."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from currency_converter.api.dependencies import get_app_settings, get_conversion_service
from currency_converter.api.models import ConvertRequest, ConvertResponse, HealthResponse
from currency_converter.errors import BackingStoreUnavailable, DeadlineExceeded, RateNotFound
from currency_converter.service import ConversionRequest, ConversionService
from currency_converter.settings import Settings

router = APIRouter()


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    body: ConvertRequest,
    timeout: Optional[float] = Query(default=None, gt=0, description="Deadline in seconds"),
    service: ConversionService = Depends(get_conversion_service),
):
    """
    Convert an amount between two currencies.

    Args:
        body: Amount and optional source/target currency codes
        timeout: Optional deadline in seconds
        service: Conversion service instance

    Returns:
        Converted amount
    """
    request = ConversionRequest(
        amount=body.amount,
        source_currency=body.source_currency,
        target_currency=body.target_currency,
    )
    try:
        result = await service.convert(request, timeout=timeout)
    except RateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BackingStoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except DeadlineExceeded as e:
        raise HTTPException(status_code=504, detail=str(e))

    return ConvertResponse(converted_amount=result.converted_amount)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: ConversionService = Depends(get_conversion_service),
    settings: Settings = Depends(get_app_settings),
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.version,
        base_currency=service.converter.base_currency,
        rate_source=settings.rate_source,
    )
