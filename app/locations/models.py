"""Location models: stored cities and places, search results."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


UNSPECIFIED_REGION = "Non spécifiée"


class PlaceKind(str, Enum):
    """Second-level place types stored in the places collection."""
    COMMUNE = "commune"
    NEIGHBORHOOD = "neighborhood"


class ResultKind(str, Enum):
    """Kinds of search results returned to clients."""
    CITY = "city"
    COMMUNE = "commune"
    NEIGHBORHOOD = "neighborhood"


# ============================================================================
# Stored records
# ============================================================================

class City(BaseModel):
    """A top-level place."""
    id: str
    name: str = Field(..., min_length=1)
    region: str = UNSPECIFIED_REGION
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Place(BaseModel):
    """
    A commune or neighborhood.

    Commune records may repeat (once per neighborhood citing them); the
    search engine collapses them, callers never have to.
    """
    id: str
    name: str = Field(..., min_length=1)
    kind: PlaceKind = PlaceKind.NEIGHBORHOOD
    parent_city_id: Optional[str] = None
    commune_name: str = ""  # own name for a commune record
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# ============================================================================
# Search results
# ============================================================================

class SearchResult(BaseModel):
    """A city, commune or neighborhood matching a query."""
    id: str
    name: str
    kind: ResultKind
    region: Optional[str] = None  # cities only
    commune_name: Optional[str] = None  # communes and neighborhoods
    parent_city_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_city(cls, city: City) -> "SearchResult":
        return cls(
            id=city.id,
            name=city.name,
            kind=ResultKind.CITY,
            region=city.region,
            latitude=city.latitude,
            longitude=city.longitude,
        )

    @classmethod
    def from_place(cls, place: Place) -> "SearchResult":
        kind = ResultKind.COMMUNE if place.kind == PlaceKind.COMMUNE else ResultKind.NEIGHBORHOOD
        return cls(
            id=place.id,
            name=place.name,
            kind=kind,
            commune_name=place.commune_name or None,
            parent_city_id=place.parent_city_id,
            latitude=place.latitude,
            longitude=place.longitude,
        )


class PopularDestination(SearchResult):
    """A city with the number of active listings located in it."""
    property_count: int = 0


@dataclass
class ScoredCandidate:
    """A search result with its provisional relevance score."""
    result: SearchResult
    score: float


# ============================================================================
# Response Schemas
# ============================================================================

class LocationSearchResponse(BaseModel):
    """Ranked search results."""
    query: str
    results: List[SearchResult] = Field(default_factory=list)
    count: int = 0
    loading: bool = Field(False, description="True while the location data is still being loaded")


class PopularLocationsResponse(BaseModel):
    """Default suggestions shown before the user types anything."""
    results: List[SearchResult] = Field(default_factory=list)
    loading: bool = False


class PopularDestinationsResponse(BaseModel):
    """Cities ranked by number of active listings."""
    destinations: List[PopularDestination] = Field(default_factory=list)
