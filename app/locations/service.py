"""Service layer for location search and suggestions."""

import logging
from typing import List, Optional

from app.core.config import get_settings
from app.locations.models import PopularDestination, SearchResult
from app.locations.normalizer import normalize
from app.locations.ranking import TypePriority, collect, dedupe_communes, rank
from app.locations.store import LocationStore, MongoLocationStore

logger = logging.getLogger(__name__)


class LocationSearchService:
    """
    Search over the location store's current snapshot.

    Every call is synchronous over in-memory data. While the store is still
    loading, or when the query is too short, results are simply empty.
    """

    def __init__(self, store: LocationStore):
        self.store = store
        self.settings = get_settings()

    def is_loading(self) -> bool:
        return self.store.is_loading()

    def search(
        self,
        query: str,
        limit: Optional[int] = None,
        priority: TypePriority = TypePriority.GENERAL,
    ) -> List[SearchResult]:
        """
        Ranked cities, communes and neighborhoods matching `query`.

        `limit` defaults to LOCATION_SEARCH_LIMIT; pass
        LOCATION_SEARCH_SCREEN_LIMIT for the dedicated search screen.
        """
        if len(normalize(query or "")) < self.settings.LOCATION_MIN_QUERY_LENGTH:
            return []
        if self.store.is_loading():
            return []

        if limit is None:
            limit = self.settings.LOCATION_SEARCH_LIMIT

        candidates = collect(query, self.store.get_cities(), self.store.get_places())
        results = rank(dedupe_communes(candidates), limit=limit, priority=priority)
        logger.debug(f"Location search {query!r}: {len(candidates)} candidates, {len(results)} results")
        return results

    def popular_or_default(self, limit: Optional[int] = None) -> List[SearchResult]:
        """First cities of the snapshot, used before anything is typed."""
        if self.store.is_loading():
            return []
        if limit is None:
            limit = self.settings.LOCATION_POPULAR_LIMIT
        cities = self.store.get_cities()[:max(limit, 0)]
        return [SearchResult.from_city(city) for city in cities]

    async def popular_destinations(self, limit: Optional[int] = None) -> List[PopularDestination]:
        """
        Cities with the most active listings, most first.

        Falls back to the default city list when no listing counts are
        available.
        """
        if limit is None:
            limit = self.settings.LOCATION_POPULAR_LIMIT

        try:
            counts = await self.store.property_counts()
        except Exception as e:
            logger.error(f"Failed to count properties per city: {e}")
            counts = {}

        cities = {city.id: city for city in self.store.get_cities()}
        ranked = sorted(
            ((city_id, count) for city_id, count in counts.items() if count > 0 and city_id in cities),
            key=lambda item: item[1],
            reverse=True,
        )[:max(limit, 0)]

        if not ranked:
            logger.info("No popular destinations found, using default cities")
            return [
                PopularDestination(**result.model_dump())
                for result in self.popular_or_default(limit)
            ]

        return [
            PopularDestination(
                **SearchResult.from_city(cities[city_id]).model_dump(),
                property_count=count,
            )
            for city_id, count in ranked
        ]


_service: Optional[LocationSearchService] = None


def get_location_service() -> LocationSearchService:
    """Process-wide search service over the Mongo-backed store."""
    global _service
    if _service is None:
        _service = LocationSearchService(MongoLocationStore())
    return _service
