"""
Async database engine and liveness handle.
Challenge: Connection pooling, cheap liveness check, proper cleanup.
Design: Engine created once at startup; the handle is injected into the prober (no globals).
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine with a connection pool. Does not connect until first use."""
    options: dict = {"echo": settings.debug, "pool_pre_ping": True}
    # SQLite (tests, local runs) uses a pool class without size limits
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = 0
    return create_async_engine(settings.database_url, **options)


class DatabaseHandle:
    """Liveness view over the shared engine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def is_connection_active(self) -> bool:
        """Check out a pooled connection and run SELECT 1. Driver errors propagate."""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def close(self) -> None:
        """Dispose of the pool (shutdown)."""
        await self.engine.dispose()
