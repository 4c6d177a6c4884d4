"""
Redis client and liveness handle.
Challenge: Connection pooling, exact PING acknowledgement check.
Design: Single client instance created at startup, dependency injection for testability.
"""

from redis.asyncio import Redis

from app.config import Settings

# Acknowledgement token a Redis server sends in reply to PING
PONG = "PONG"


def create_redis(settings: Settings) -> Redis:
    """Shared async Redis client (connection pool managed by redis-py). Connects lazily."""
    return Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )


class RedisCacheHandle:
    """Liveness view over the shared Redis client."""

    def __init__(self, client: Redis):
        self.client = client

    async def ping(self) -> str:
        """Send PING and return the acknowledgement token. Connection errors propagate.

        redis-py parses the reply into a bool that is True only when the server
        answered exactly PONG, so anything else comes back as an empty reply.
        """
        reply = await self.client.ping()
        return PONG if reply is True else ""

    async def close(self) -> None:
        await self.client.aclose()
