"""Schemas for city search and responses."""

from typing import List
from pydantic import BaseModel


class CitySearchResponse(BaseModel):
    """List response for city search/typeahead."""
    query: str
    cities: List[str]
