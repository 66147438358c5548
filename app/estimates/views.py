"""Fare estimate API routes."""

from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, Query

from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_http_transport
from app.core.exceptions import BadRequestException
from app.estimates.form import QUICK_ROUTES, derive_quarter
from app.estimates.models import (
    EstimateRequest,
    EstimateResponse,
    QuarterResponse,
    QuickRouteResponse,
)
from app.estimates.service import EstimateService

router = APIRouter(prefix="/estimates", tags=["Estimates"])


@router.post("", response_model=EstimateResponse)
async def create_estimate(
    body: EstimateRequest,
    settings: Settings = Depends(get_app_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
):
    """
    Estimate the fare between two cities on a future date.

    The date is reduced to its calendar quarter before it is sent to the model.
    """
    payload = EstimateService.validate(settings.FARE_API_URL, body.city1, body.city2, body.date)
    prediction = await EstimateService.fetch_prediction(
        settings.FARE_API_URL,
        payload,
        transport=transport,
        timeout=settings.FARE_API_TIMEOUT_SECONDS,
    )
    return EstimateResponse(
        city1=payload.city1,
        city2=payload.city2,
        date=body.date,
        quarter=payload.quarter,
        prediction=prediction,
    )


@router.get("/quarter", response_model=QuarterResponse)
async def get_quarter(date: str = Query(..., description="YYYY-MM-DD")):
    """Quarter a travel date maps to."""
    try:
        quarter = derive_quarter(date)
    except ValueError:
        raise BadRequestException("Please pick a travel date.")
    return QuarterResponse(date=date, quarter=quarter)


@router.get("/quick-routes", response_model=List[QuickRouteResponse])
async def list_quick_routes():
    """Preset popular routes with dates counted from tomorrow."""
    return [
        QuickRouteResponse(
            id=r.id,
            label=r.label,
            sub=r.sub,
            city1=r.origin,
            city2=r.destination,
            date=r.travel_date(),
        )
        for r in QUICK_ROUTES
    ]
