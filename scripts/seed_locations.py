#!/usr/bin/env python3
"""
Seed script for the cities and places collections.

Reads a JSON file shaped like data/locations.sample.json:
{"cities": [...], "places": [...]}. Duplicate city names are dropped
(keeps the first occurrence) and commune records get their own name as
commune_name, which is what the location search expects.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import certifi
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError

# Make app package importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.locations.models import PlaceKind
from app.locations.store import city_from_document, dedupe_cities_by_name, place_from_document

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "locations.sample.json"


def get_client(uri: str) -> AsyncIOMotorClient:
    """Create Mongo client with TLS if needed."""
    client_kwargs = {}
    if "mongodb+srv://" in uri or "ssl=true" in uri.lower():
        client_kwargs["tlsCAFile"] = certifi.where()
    return AsyncIOMotorClient(uri, **client_kwargs)


def _build_valid(rows: list, build, label: str) -> list:
    records = []
    for row in rows:
        try:
            records.append(build(row))
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping {label} row {row.get('name')!r}: {e}")
    return records


def build_documents(payload: dict) -> tuple[list[dict], list[dict]]:
    """Validate raw records and return (city docs, place docs)."""
    cities = dedupe_cities_by_name(_build_valid(payload.get("cities", []), city_from_document, "city"))
    places = _build_valid(payload.get("places", []), place_from_document, "place")

    city_docs = [city.model_dump() for city in cities]
    place_docs = []
    for place in places:
        doc = place.model_dump()
        doc["kind"] = place.kind.value
        if place.kind == PlaceKind.NEIGHBORHOOD and not place.commune_name:
            logger.warning(f"Neighborhood {place.name} ({place.id}) has no commune")
        place_docs.append(doc)
    return city_docs, place_docs


async def seed_locations(path: Path):
    settings = get_settings()
    if not path.exists():
        raise FileNotFoundError(f"Locations file not found at {path}")

    city_docs, place_docs = build_documents(json.loads(path.read_text(encoding="utf-8")))

    client = get_client(settings.MONGO_URI)
    db = client[settings.MONGO_DB_NAME]
    cities = db[settings.LOCATION_CITIES_COLLECTION]
    places = db[settings.LOCATION_PLACES_COLLECTION]

    # Replace existing data
    await cities.delete_many({})
    await places.delete_many({})
    if city_docs:
        await cities.insert_many(city_docs)
    if place_docs:
        await places.insert_many(place_docs)
    await cities.create_index("id", unique=True)
    await cities.create_index("name")
    await places.create_index("id", unique=True)
    await places.create_index([("commune_name", 1), ("name", 1)])

    logger.info(f"Seeded {len(city_docs)} cities and {len(place_docs)} places")
    client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("path", nargs="?", type=Path, default=DEFAULT_PATH)
    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed_locations(args.path))
