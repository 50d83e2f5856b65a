"""Process-wide logging setup, applied once at startup."""

import logging

from src.infrastructure.database import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings.log_level.

    Unknown level names fall back to INFO.  SQLAlchemy's engine logger is
    left alone; use Settings.database_echo to see emitted SQL.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=True)
    logging.getLogger(__name__).debug("Logging configured at level %s", logging.getLevelName(level))
