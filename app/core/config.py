"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Akwaba Stays API"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "akwaba"

    # Location store collections
    LOCATION_CITIES_COLLECTION: str = "cities"
    LOCATION_PLACES_COLLECTION: str = "places"
    PROPERTIES_COLLECTION: str = "properties"

    # Location search
    LOCATION_SEARCH_LIMIT: int = 15  # typing in an input field
    LOCATION_SEARCH_SCREEN_LIMIT: int = 20  # dedicated search screen
    LOCATION_POPULAR_LIMIT: int = 8
    LOCATION_MIN_QUERY_LENGTH: int = 2
    LOCATION_MAX_LIMIT: int = 50
    LOCATION_REFRESH_SECONDS: int = 300
    LOCATION_RETRY_SECONDS: int = 10  # after a failed load

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"



@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
