"""
FastAPI dependencies - injection of the dependency handles (SOLID: Dependency Inversion).
Challenge: No ambient globals; tests swap in fake handles via dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends, Request

from app.cache.redis_client import RedisCacheHandle
from app.config import Settings, get_settings
from app.db.session import DatabaseHandle
from app.services.health_service import DependencyProber


def get_database_handle(request: Request) -> DatabaseHandle | None:
    """Handle created by the lifespan; None if startup has not run."""
    return getattr(request.app.state, "database", None)


def get_cache_handle(request: Request) -> RedisCacheHandle | None:
    return getattr(request.app.state, "cache", None)


def get_prober(
    database: Annotated[DatabaseHandle | None, Depends(get_database_handle)],
    cache: Annotated[RedisCacheHandle | None, Depends(get_cache_handle)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DependencyProber:
    """Fresh prober per request over the shared, long-lived handles."""
    return DependencyProber(database, cache, timeout_seconds=settings.health_probe_timeout_seconds)


Prober = Annotated[DependencyProber, Depends(get_prober)]
