"""Process-wide logging setup."""

import logging

from .config import Settings


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    logging.basicConfig(level=level, format=settings.logging.format)
    # SQL echo is controlled by the engine settings, keep the logger quiet otherwise.
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
