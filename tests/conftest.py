"""
Pytest fixtures - fake dependency handles, prober, HTTP client.
Challenge: Isolated tests; no real PostgreSQL or Redis needed.
"""

import asyncio
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.dependencies import get_prober
from app.main import app
from app.services.health_service import DependencyProber

# Short enough to keep hung-probe tests fast
TEST_PROBE_TIMEOUT = 0.2


class FakeDatabase:
    """Stands in for DatabaseHandle. Flip attributes between requests to change state."""

    def __init__(self, active: bool = True, error: Exception | None = None, delay: float = 0.0):
        self.active = active
        self.error = error
        self.delay = delay
        self.calls = 0

    async def is_connection_active(self) -> bool:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.active


class FakeCache:
    """Stands in for RedisCacheHandle."""

    def __init__(self, reply: str = "PONG", error: Exception | None = None, delay: float = 0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = 0

    async def ping(self) -> str:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def prober(fake_db: FakeDatabase, fake_cache: FakeCache) -> DependencyProber:
    return DependencyProber(fake_db, fake_cache, timeout_seconds=TEST_PROBE_TIMEOUT)


@pytest.fixture
def override_prober(prober: DependencyProber):
    """Route every request's prober to the fake handles."""
    app.dependency_overrides[get_prober] = lambda: prober
    yield prober
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override_prober) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
