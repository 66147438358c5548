"""Metadata (city universe + quarter set) models."""

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

DEFAULT_QUARTERS: Tuple[int, ...] = (1, 2, 3, 4)


class MetaState(BaseModel):
    """Snapshot of the metadata load for one mount."""
    model_config = ConfigDict(frozen=True)

    places: Tuple[str, ...] = ()
    quarters: Tuple[int, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None


class MetaResponse(BaseModel):
    """Response schema for the metadata status endpoint."""
    loading: bool
    error: Optional[str] = None
    cities_count: int
    quarters: List[int]
