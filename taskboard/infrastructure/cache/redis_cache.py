"""Redis adapter for the remote cache tier.

Thin byte-level wrapper over redis.asyncio. Connection and timeout policy
lives in CacheService; this module only maps redis errors to
RemoteCacheUnavailableError so the service sees a single failure type.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import redis.asyncio as redis

from taskboard.core.config import Settings
from taskboard.infrastructure.exceptions import RemoteCacheUnavailableError

logger = logging.getLogger(__name__)


def _ttl_ms(ttl: timedelta) -> int:
    """Redis PX argument; sub-millisecond TTLs round up to 1ms."""
    return max(1, int(ttl.total_seconds() * 1000))


class RedisRemoteCache:
    """Remote tier backed by Redis. Implements RemoteCacheProtocol.

    The client connects lazily on first command, so constructing this
    adapter never blocks startup when Redis is down.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize with a redis.asyncio client (injected for tests or DI)."""
        self.redis = redis_client

    @classmethod
    def from_settings(cls, settings: Settings) -> RedisRemoteCache:
        """Build a client from redis_* settings.

        Socket timeouts are a backstop only; CacheService applies the
        shorter per-call timeout.
        """
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=(
                settings.redis_password.get_secret_value()
                if settings.redis_password
                else None
            ),
            decode_responses=False,
            socket_connect_timeout=settings.cache_operation_timeout_seconds,
            socket_timeout=settings.cache_operation_timeout_seconds,
            socket_keepalive=True,
        )
        logger.info(
            "Redis remote cache configured: %s:%s/%s",
            settings.redis_host,
            settings.redis_port,
            settings.redis_db,
        )
        return cls(client)

    async def get(self, key: str) -> bytes | None:
        """Return raw payload or None."""
        try:
            return await self.redis.get(key)
        except redis.RedisError as e:
            raise RemoteCacheUnavailableError("get", key, str(e)) from e

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Store payload with millisecond-precision expiration."""
        try:
            await self.redis.set(key, value, px=_ttl_ms(ttl))
        except redis.RedisError as e:
            raise RemoteCacheUnavailableError("set", key, str(e)) from e

    async def remove(self, key: str) -> None:
        """Delete key."""
        try:
            await self.redis.delete(key)
        except redis.RedisError as e:
            raise RemoteCacheUnavailableError("remove", key, str(e)) from e

    async def close(self) -> None:
        """Close the connection pool. Call on app shutdown."""
        await self.redis.aclose()
        logger.info("Redis remote cache closed")
