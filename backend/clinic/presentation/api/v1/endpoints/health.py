"""Health check endpoint — reports app metadata and database reachability."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from clinic.config import get_settings
from clinic.infrastructure.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status.

    Always answers 200; an unreachable database shows up as ``degraded``.
    """
    settings = get_settings()
    database = "up"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        database = "down"

    return {
        "status": "healthy" if database == "up" else "degraded",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": database,
    }
