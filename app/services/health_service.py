"""
Health service - dependency liveness probes (SOLID: Single Responsibility).
Challenge: Never let a dependency failure escape; bound every probe with a timeout.
Design: Handles injected at construction; each probe returns an explicit ProbeResult
that the public checks map onto the "connected"/"disconnected" vocabulary.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from app.cache.redis_client import PONG
from app.schemas.health import (
    CONNECTED,
    DISCONNECTED,
    HealthReport,
    ServiceStatus,
    ServiceStatuses,
)

logger = logging.getLogger(__name__)

# Failures a client library is expected to raise when its server is unhealthy
CLIENT_ERRORS = (SQLAlchemyError, RedisError, OSError)


class DatabaseLiveness(Protocol):
    async def is_connection_active(self) -> bool: ...


class CacheLiveness(Protocol):
    async def ping(self) -> str: ...


class DependencyUnavailable(Exception):
    """A dependency could not be confirmed live (refused, timed out, bad reply, no handle)."""

    def __init__(self, dependency: str, reason: str):
        super().__init__(f"{dependency} unavailable: {reason}")
        self.dependency = dependency
        self.reason = reason


@dataclass(frozen=True)
class ProbeResult:
    ok: bool
    error: DependencyUnavailable | None = None

    @classmethod
    def failed(cls, dependency: str, reason: str) -> "ProbeResult":
        return cls(ok=False, error=DependencyUnavailable(dependency, reason))

    @property
    def status(self) -> ServiceStatus:
        return CONNECTED if self.ok else DISCONNECTED


class DependencyProber:
    """Checks database and Redis liveness. One fresh check per call, no caching, no retries."""

    def __init__(
        self,
        database: DatabaseLiveness | None,
        cache: CacheLiveness | None,
        timeout_seconds: float = 2.0,
    ):
        self.database = database
        self.cache = cache
        self.timeout_seconds = timeout_seconds

    async def _bounded(self, dependency: str, call: Callable[[], Awaitable]) -> tuple[object, ProbeResult | None]:
        """Await a client call under the timeout. Returns (value, None) or (None, failure)."""
        deadline = asyncio.timeout(self.timeout_seconds)
        try:
            async with deadline:
                return await call(), None
        except CLIENT_ERRORS as e:
            # TimeoutError is an OSError: only our own deadline counts as "no reply"
            if isinstance(e, TimeoutError) and deadline.expired():
                reason = f"no reply within {self.timeout_seconds}s"
            else:
                reason = f"{type(e).__name__}: {e}"
        except Exception as e:
            # Not a known client failure: keep the traceback so real bugs stay visible
            logger.exception("Unexpected error while probing %s", dependency)
            return None, ProbeResult.failed(dependency, f"{type(e).__name__}: {e}")
        logger.warning("Health probe failed: dependency=%s reason=%s", dependency, reason)
        return None, ProbeResult.failed(dependency, reason)

    async def probe_database(self) -> ProbeResult:
        if self.database is None:
            return ProbeResult.failed("database", "no connection handle")
        active, failure = await self._bounded("database", self.database.is_connection_active)
        if failure is not None:
            return failure
        if active is not True:
            logger.warning("Health probe failed: dependency=database reason=connection inactive")
            return ProbeResult.failed("database", "connection inactive")
        return ProbeResult(ok=True)

    async def probe_redis(self) -> ProbeResult:
        if self.cache is None:
            return ProbeResult.failed("redis", "no connection handle")
        reply, failure = await self._bounded("redis", self.cache.ping)
        if failure is not None:
            return failure
        # Exact, case-sensitive match on the acknowledgement token
        if reply != PONG:
            logger.warning("Health probe failed: dependency=redis reason=PING reply %r", reply)
            return ProbeResult.failed("redis", f"unexpected PING reply {reply!r}")
        return ProbeResult(ok=True)

    async def check_database(self) -> ServiceStatus:
        return (await self.probe_database()).status

    async def check_redis(self) -> ServiceStatus:
        return (await self.probe_redis()).status

    async def check_all(self) -> ServiceStatuses:
        """Probe both dependencies concurrently. Always returns both entries."""
        database, redis = await asyncio.gather(self.check_database(), self.check_redis())
        return ServiceStatuses(database=database, redis=redis)

    async def build_report(self) -> HealthReport:
        services = await self.check_all()
        return HealthReport(timestamp=datetime.now(timezone.utc), services=services)
