"""API routes for metadata load status."""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_metadata_loader
from app.meta.models import MetaResponse
from app.meta.service import MetadataLoader

router = APIRouter(prefix="/meta", tags=["Meta"])


@router.get("", response_model=MetaResponse)
async def get_meta(loader: MetadataLoader = Depends(get_metadata_loader)):
    """Whether the city list is loaded, and why not if it failed."""
    state = loader.state
    return MetaResponse(
        loading=state.loading,
        error=state.error,
        cities_count=len(state.places),
        quarters=list(state.quarters),
    )
