"""Logging setup shared by the API and the scripts."""

import logging

from app.core.config import get_settings


def configure_logging(level: str = None) -> None:
    """Configure root logging once, using LOG_LEVEL unless overridden."""
    effective = (level or get_settings().LOG_LEVEL).upper()
    numeric_level = getattr(logging, effective, logging.INFO)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    root_logger.setLevel(numeric_level)
