"""Centralized logging configuration.

Each Settings ``log_level_*`` field controls one family of loggers, so SQL
echo or access logs can be turned up or down without touching the rest of
the application.

Usage:
    from clinic.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from clinic.config import get_settings

# Settings field -> loggers it governs
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_query": [
        "clinic.application.query",
        "clinic.infrastructure.database.query",
    ],
    "log_level_auth": [
        "clinic.application.services.auth_service",
        "clinic.presentation.api.auth",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
_DEV_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d — %(message)s"


def setup_logging() -> None:
    """Apply the root level, a fallback stderr handler and per-category levels."""
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(parse_level(settings.log_level))

    # uvicorn usually installs a handler; scripts and tests may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(_DEV_FORMAT if settings.is_development else _FORMAT)
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, sql=%s, uvicorn=%s, query=%s, auth=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_query,
        settings.log_level_auth,
    )


def parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
