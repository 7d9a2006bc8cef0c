"""API routes for location search and suggestions."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import get_settings
from app.core.exceptions import BadRequestException
from app.locations.models import (
    LocationSearchResponse,
    PopularDestinationsResponse,
    PopularLocationsResponse,
)
from app.locations.ranking import TypePriority
from app.locations.service import LocationSearchService, get_location_service

settings = get_settings()

router = APIRouter(prefix="/locations", tags=["Locations"])


def _parse_order(order: str) -> TypePriority:
    try:
        return TypePriority(order)
    except ValueError:
        allowed = ", ".join(p.value for p in TypePriority)
        raise BadRequestException(f"Unknown order '{order}'. Use one of: {allowed}.")


@router.get("/search", response_model=LocationSearchResponse)
async def search_locations(
    q: str = Query("", description="Text typed by the user"),
    limit: Optional[int] = Query(None, ge=0, le=settings.LOCATION_MAX_LIMIT, description="Max results to return"),
    screen: bool = Query(False, description="Use the search screen's larger default cap"),
    order: str = Query(TypePriority.GENERAL.value, description="Tie-break order between result kinds"),
    service: LocationSearchService = Depends(get_location_service),
):
    """
    Accent-, case- and punctuation-insensitive search over cities, communes
    and neighborhoods.

    Queries shorter than two characters return no results. `loading` is true
    while the location data has not been loaded yet.
    """
    priority = _parse_order(order)
    service.store.ensure_fresh()

    if limit is None:
        limit = settings.LOCATION_SEARCH_SCREEN_LIMIT if screen else settings.LOCATION_SEARCH_LIMIT

    results = service.search(q, limit=limit, priority=priority)
    return LocationSearchResponse(
        query=q,
        results=results,
        count=len(results),
        loading=service.is_loading(),
    )


@router.get("/popular", response_model=PopularLocationsResponse)
async def popular_locations(
    limit: int = Query(settings.LOCATION_POPULAR_LIMIT, ge=0, le=settings.LOCATION_MAX_LIMIT),
    service: LocationSearchService = Depends(get_location_service),
):
    """Default suggestions shown when the search field is empty."""
    service.store.ensure_fresh()
    return PopularLocationsResponse(
        results=service.popular_or_default(limit),
        loading=service.is_loading(),
    )


@router.get("/destinations/popular", response_model=PopularDestinationsResponse)
async def popular_destinations(
    limit: int = Query(settings.LOCATION_POPULAR_LIMIT, ge=1, le=settings.LOCATION_MAX_LIMIT),
    service: LocationSearchService = Depends(get_location_service),
):
    """Cities with the most active listings."""
    service.store.ensure_fresh()
    destinations = await service.popular_destinations(limit)
    return PopularDestinationsResponse(destinations=destinations)
