"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup/shutdown of the DB and Redis clients.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.cache.redis_client import RedisCacheHandle, create_redis
from app.config import get_settings
from app.core.logging_config import configure_logging
from app.core.metrics import MetricsMiddleware
from app.db.session import DatabaseHandle, create_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the shared DB engine and Redis client. Shutdown: release both."""
    settings = get_settings()
    configure_logging(settings.log_level)
    # Neither client connects here, so the app boots even with PostgreSQL/Redis down
    app.state.database = DatabaseHandle(create_engine(settings))
    app.state.cache = RedisCacheHandle(create_redis(settings))
    logger.info("%s started", settings.app_name)
    yield
    for name in ("database", "cache"):
        try:
            await getattr(app.state, name).close()
        except Exception:
            logger.warning("Failed to close %s client", name, exc_info=True)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Hello page, dependency health check and Prometheus metrics.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request count, duration and in-flight gauge, scraped at /metrics
    app.add_middleware(MetricsMiddleware)

    app.include_router(api_router)

    return app


app = create_app()
