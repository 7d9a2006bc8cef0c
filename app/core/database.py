"""
MongoDB database connection and utilities.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

    @classmethod
    async def connect(cls):
        """Connect to MongoDB."""
        cls.client = AsyncIOMotorClient(settings.MONGO_URI)
        cls.db = cls.client[settings.MONGO_DB_NAME]

        # Create indexes
        await cls._create_indexes()

        logger.info(f"Connected to MongoDB: {settings.MONGO_DB_NAME}")

    @classmethod
    async def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    async def _create_indexes(cls):
        """Create database indexes for better query performance."""
        # Cities collection
        cities = cls.db[settings.LOCATION_CITIES_COLLECTION]
        await cities.create_index("id", unique=True)
        await cities.create_index("name")

        # Places collection (communes and neighborhoods)
        places = cls.db[settings.LOCATION_PLACES_COLLECTION]
        await places.create_index("id", unique=True)
        await places.create_index([("commune_name", 1), ("name", 1)])

        # Properties are only read for popular destinations
        await cls.db[settings.PROPERTIES_COLLECTION].create_index([("is_active", 1), ("city_id", 1)])

    @classmethod
    def get_collection(cls, name: str):
        """Get a collection by name."""
        return cls.db[name]
