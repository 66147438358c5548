"""Fare estimate models and schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PredictionPayload(BaseModel):
    """Body sent to the prediction endpoint."""
    city1: str
    city2: str
    quarter: int = Field(..., ge=1, le=4)


class PredictionState(BaseModel):
    """What the estimate panel shows: loading, or exactly one of result/error."""
    model_config = ConfigDict(frozen=True)

    loading: bool = False
    result: Optional[float] = None
    quarter: Optional[int] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    error_reason: Optional[str] = None


class EstimateRequest(BaseModel):
    """Request schema for creating an estimate."""
    city1: str = ""
    city2: str = ""
    date: str = Field("", description="Travel date, YYYY-MM-DD, tomorrow or later")


class EstimateResponse(BaseModel):
    """Response schema for a fare estimate."""
    city1: str
    city2: str
    date: str
    quarter: int
    prediction: float


class QuarterResponse(BaseModel):
    date: str
    quarter: int


class QuickRouteResponse(BaseModel):
    """A preset route with its travel date resolved for today."""
    id: str
    label: str
    sub: str
    city1: str
    city2: str
    date: str
