# backend/game_completion/core/logging.py
"""Logging setup for processes hosting the game completion rules."""

import logging
from typing import Optional

from .config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    active = settings or default_settings
    level = getattr(logging, active.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    quiet_level = logging.INFO if active.database_echo else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
