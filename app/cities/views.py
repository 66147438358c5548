"""API routes for city typeahead."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_metadata_loader
from app.cities.service import CitiesService
from app.cities.schemas import CitySearchResponse
from app.meta.service import MetadataLoader

router = APIRouter(prefix="/cities", tags=["Cities"])


@router.get("", response_model=CitySearchResponse)
async def search_cities(
    query: str = Query("", description="Search text, matched anywhere in the city name"),
    limit: Optional[int] = Query(None, ge=1, le=50, description="Max results to return"),
    loader: MetadataLoader = Depends(get_metadata_loader),
    settings: Settings = Depends(get_app_settings),
):
    """
    Ranked city suggestions from the loaded city list.

    Empty while the list is still loading or failed to load.
    """
    cities = CitiesService.search(loader.places, query=query, limit=limit or settings.SUGGESTION_LIMIT)
    return CitySearchResponse(query=query, cities=cities)
