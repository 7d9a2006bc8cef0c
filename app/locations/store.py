"""
Location store: read-only snapshots of cities and places for the search engine.

The Mongo-backed store loads both collections into memory and refreshes
them in the background once the snapshot is older than
LOCATION_REFRESH_SECONDS. Searches never wait on a load.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import Database
from app.locations.models import City, Place, PlaceKind, UNSPECIFIED_REGION

logger = logging.getLogger(__name__)


def dedupe_cities_by_name(cities: Sequence[City]) -> List[City]:
    """Drop cities whose name repeats an earlier one (first kept)."""
    seen = set()
    unique = []
    for city in cities:
        if city.name in seen:
            continue
        seen.add(city.name)
        unique.append(city)
    return unique


class LocationStore:
    """Snapshot interface consumed by the search service."""

    def get_cities(self) -> List[City]:
        raise NotImplementedError

    def get_places(self) -> List[Place]:
        raise NotImplementedError

    def is_loading(self) -> bool:
        return False

    def ensure_fresh(self) -> None:
        """Hook for stores that reload themselves; static stores never do."""

    async def property_counts(self) -> Dict[str, int]:
        """Number of active listings per city id."""
        return {}


class StaticLocationStore(LocationStore):
    """Store over fixed in-memory lists."""

    def __init__(
        self,
        cities: Optional[Sequence[City]] = None,
        places: Optional[Sequence[Place]] = None,
        property_counts: Optional[Dict[str, int]] = None,
        loading: bool = False,
    ):
        self._cities = dedupe_cities_by_name(cities or [])
        self._places = list(places or [])
        self._property_counts = dict(property_counts or {})
        self.loading = loading

    def get_cities(self) -> List[City]:
        return list(self._cities)

    def get_places(self) -> List[Place]:
        return list(self._places)

    def is_loading(self) -> bool:
        return self.loading

    async def property_counts(self) -> Dict[str, int]:
        return dict(self._property_counts)


def document_id(doc: dict) -> str:
    """Record id: the explicit `id` field, else the Mongo `_id`."""
    value = doc.get("id")
    if value is None or value == "":
        value = doc.get("_id")
    if value is None or value == "":
        raise ValueError("document has neither id nor _id")
    return str(value)


def city_from_document(doc: dict) -> City:
    """Build a City from a `cities` document."""
    return City(
        id=document_id(doc),
        name=(doc.get("name") or "").strip(),
        region=(doc.get("region") or "").strip() or UNSPECIFIED_REGION,
        latitude=doc.get("latitude"),
        longitude=doc.get("longitude"),
    )


def place_from_document(doc: dict) -> Place:
    """Build a Place from a `places` document."""
    name = (doc.get("name") or "").strip()
    kind = PlaceKind(doc.get("kind") or PlaceKind.NEIGHBORHOOD.value)
    commune_name = (doc.get("commune_name") or "").strip()
    if kind == PlaceKind.COMMUNE and not commune_name:
        commune_name = name
    return Place(
        id=document_id(doc),
        name=name,
        kind=kind,
        parent_city_id=doc.get("parent_city_id"),
        commune_name=commune_name,
        latitude=doc.get("latitude"),
        longitude=doc.get("longitude"),
    )


class MongoLocationStore(LocationStore):
    """Store backed by the `cities`, `places` and `properties` collections."""

    def __init__(
        self,
        get_collection: Callable[[str], object] = None,
        refresh_seconds: Optional[int] = None,
        retry_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self._get_collection = get_collection or Database.get_collection
        self.refresh_seconds = settings.LOCATION_REFRESH_SECONDS if refresh_seconds is None else refresh_seconds
        self.retry_seconds = settings.LOCATION_RETRY_SECONDS if retry_seconds is None else retry_seconds
        self.cities_collection = settings.LOCATION_CITIES_COLLECTION
        self.places_collection = settings.LOCATION_PLACES_COLLECTION
        self.properties_collection = settings.PROPERTIES_COLLECTION

        self._cities: List[City] = []
        self._places: List[Place] = []
        self._loaded_at: Optional[float] = None
        self._failed_at: Optional[float] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self.refreshing = False

    def get_cities(self) -> List[City]:
        return self._cities

    def get_places(self) -> List[Place]:
        return self._places

    def is_loading(self) -> bool:
        """True until a snapshot has been loaded successfully."""
        return self._loaded_at is None

    def is_stale(self) -> bool:
        now = time.monotonic()
        if self._failed_at is not None and now - self._failed_at < self.retry_seconds:
            return False
        if self._loaded_at is None:
            return True
        return now - self._loaded_at >= self.refresh_seconds

    async def refresh(self) -> None:
        """
        Reload both collections.

        On failure the previous snapshot stays in place and the error is
        logged. The next attempt waits LOCATION_RETRY_SECONDS; a store that
        never loaded keeps reporting that it is loading.
        """
        if self.refreshing:
            return
        self.refreshing = True
        logger.info("Loading location snapshot")
        try:
            cities = await self._load(self.cities_collection, "name", city_from_document)
            places = await self._load(self.places_collection, "commune_name", place_from_document)
            self._cities = dedupe_cities_by_name(cities)
            self._places = places
            self._loaded_at = time.monotonic()
            self._failed_at = None
            logger.info(f"Loaded {len(self._cities)} cities and {len(self._places)} places")
        except Exception as e:
            self._failed_at = time.monotonic()
            logger.error(f"Failed to load location snapshot: {e}")
        finally:
            self.refreshing = False

    async def _load(self, collection_name: str, sort_field: str, build) -> list:
        collection = self._get_collection(collection_name)
        cursor = collection.find({}).sort([(sort_field, 1), ("name", 1)])
        docs = await cursor.to_list(length=None)

        records = []
        for doc in docs:
            try:
                records.append(build(doc))
            except (ValidationError, ValueError) as e:
                logger.warning(f"Skipping invalid {collection_name} document {doc.get('id', doc.get('_id'))}: {e}")
        return records

    def ensure_fresh(self) -> None:
        """Schedule a background refresh when the snapshot is missing or stale."""
        if self.refreshing or not self.is_stale():
            return
        if self._refresh_task is not None and not self._refresh_task.done():
            return
        self._refresh_task = asyncio.get_running_loop().create_task(self.refresh())

    async def property_counts(self) -> Dict[str, int]:
        collection = self._get_collection(self.properties_collection)
        pipeline = [
            {"$match": {"is_active": True, "city_id": {"$ne": None}}},
            {"$group": {"_id": "$city_id", "count": {"$sum": 1}}},
        ]
        cursor = collection.aggregate(pipeline)
        rows = await cursor.to_list(length=None)
        return {str(row["_id"]): int(row["count"]) for row in rows if row.get("_id") is not None}
