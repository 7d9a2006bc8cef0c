"""Core module - config, database, exceptions, logging."""

from app.core.config import get_settings, Settings
from app.core.database import Database
from app.core.exceptions import AppException, BadRequestException
from app.core.logging import configure_logging

__all__ = [
    "get_settings",
    "Settings",
    "Database",
    "AppException",
    "BadRequestException",
    "configure_logging",
]
