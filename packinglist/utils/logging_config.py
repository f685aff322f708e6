"""Process-wide logging setup."""

import logging

from packinglist.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
    )

    # Engine echo goes through the sqlalchemy.engine logger
    if settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
