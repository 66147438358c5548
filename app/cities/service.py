"""Service layer for the city typeahead."""

from typing import List, Sequence

from app.cities.matching import DEFAULT_LIMIT, rank_cities


class CitiesService:
    """Service for city search/typeahead over the loaded place universe."""

    @classmethod
    def search(cls, places: Sequence[str], query: str = "", limit: int = DEFAULT_LIMIT) -> List[str]:
        """
        Case- and whitespace-insensitive substring search.

        Earlier matches rank first, then shorter names, then alphabetical.
        A blank query returns nothing.
        """
        return rank_cities(places, query, limit)
