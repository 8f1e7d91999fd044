"""Call Roster — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.adapters.persistence.database import engine
from app.config import settings
from app.infrastructure.api.routes_call_list import router as call_list_router
from app.infrastructure.api.routes_health import router as health_router
from app.infrastructure.api.routes_lists import router as lists_router
from app.infrastructure.api.routes_workers import router as workers_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Call Roster",
        description="Contact list ingestion, distribution across agents, and completion tracking",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(workers_router, prefix="/api")
    app.include_router(call_list_router, prefix="/api")
    app.include_router(lists_router, prefix="/api")

    return app


app = create_app()
