"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic.config import get_settings
from clinic.infrastructure.database import Base, engine
from clinic.infrastructure.logging.log_config import setup_logging
from clinic.presentation.api.v1.router import router as v1_router
from clinic.presentation.error_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create any missing tables. There is no migration tool; this is idempotent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables, dispose the pool."""
    settings = get_settings()
    setup_logging()

    await create_tables()
    logger.info(
        "%s %s started (env=%s)", settings.app_title, settings.app_version, settings.app_env
    )

    yield

    # Shutdown
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware — credentials on, the access token travels as a cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "clinic.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
