"""Two-tier cache service: local in-process tier in front of a remote tier.

Reads check the local tier first, then the remote tier (populating the local
tier on a remote hit). Writes always land in the local tier and are copied
to the remote tier when it is available. Every remote call runs under a
short timeout; any failure degrades the ConnectivityMonitor and the call
completes as a local-only operation. Callers only ever observe cache misses,
never errors.

Pattern keys (ending with '*') are removed from the local tier only; remote
entries under the prefix expire on their TTL.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar, overload

from taskboard.core.config import Settings
from taskboard.core.constants import CACHE_PROBE_KEY
from taskboard.infrastructure.cache.cache_protocol import RemoteCacheProtocol
from taskboard.infrastructure.cache.connectivity import ConnectivityMonitor
from taskboard.infrastructure.cache.local_cache import LocalCache
from taskboard.infrastructure.cache.serialization import deserialize, serialize
from taskboard.shared.cache_keys import is_pattern, pattern_prefix

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheSettings:
    """Timing policy for CacheService (decoupled from pydantic Settings)."""

    local_ttl: timedelta = timedelta(minutes=10)
    remote_ttl: timedelta = timedelta(minutes=10)
    retry_interval: timedelta = timedelta(minutes=2)
    operation_timeout: float = 1.0
    probe_timeout: float = 0.5
    local_sweep_interval: timedelta = timedelta(minutes=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheSettings:
        return cls(
            local_ttl=timedelta(seconds=settings.cache_local_ttl_seconds),
            remote_ttl=timedelta(seconds=settings.cache_remote_ttl_seconds),
            retry_interval=timedelta(seconds=settings.cache_retry_interval_seconds),
            operation_timeout=settings.cache_operation_timeout_seconds,
            probe_timeout=settings.cache_probe_timeout_seconds,
            local_sweep_interval=timedelta(
                seconds=settings.cache_local_sweep_interval_seconds
            ),
        )


@dataclass(frozen=True)
class CacheStatus:
    """Point-in-time view of the cache, exposed by the health endpoint."""

    remote_configured: bool
    degraded: bool
    seconds_since_last_probe: float | None
    local_entries: int


class CacheService:
    """Cache-aside service combining LocalCache, a remote tier and a monitor.

    Implements ICacheService. A single instance is shared by all requests.
    With remote=None the service is a local-only cache and never degrades.
    """

    def __init__(
        self,
        local: LocalCache,
        remote: RemoteCacheProtocol | None,
        monitor: ConnectivityMonitor,
        settings: CacheSettings | None = None,
    ) -> None:
        self.local = local
        self.remote = remote
        self.monitor = monitor
        self.settings = settings or CacheSettings()
        self._prefix_gap_reported = False

    @classmethod
    def create(
        cls,
        settings: CacheSettings,
        remote: RemoteCacheProtocol | None,
        clock: Callable[[], float] = time.monotonic,
    ) -> CacheService:
        """Build the service with a fresh local tier and monitor sharing one clock."""
        return cls(
            local=LocalCache(
                default_ttl=settings.local_ttl,
                clock=clock,
                sweep_interval=settings.local_sweep_interval,
            ),
            remote=remote,
            monitor=ConnectivityMonitor(settings.retry_interval, clock=clock),
            settings=settings,
        )

    def is_available(self) -> bool:
        """Return True if the remote tier is configured and not degraded."""
        return self.remote is not None and not self.monitor.is_degraded

    def status(self) -> CacheStatus:
        return CacheStatus(
            remote_configured=self.remote is not None,
            degraded=self.monitor.is_degraded,
            seconds_since_last_probe=self.monitor.seconds_since_last_probe,
            local_entries=len(self.local),
        )

    def _degrade(self, operation: str, key: str, error: BaseException) -> None:
        self.monitor.mark_degraded(f"{operation} {key!r} failed: {error!r}")

    async def _probe(self) -> None:
        if self.remote is None:
            return
        await asyncio.wait_for(
            self.remote.get(CACHE_PROBE_KEY), timeout=self.settings.probe_timeout
        )

    async def _remote_ready(self) -> bool:
        """True if a remote call should be attempted (probing when degraded)."""
        if self.remote is None:
            return False
        if not self.monitor.is_degraded:
            return True
        return await self.monitor.try_recover(self._probe)

    @overload
    async def get(self, key: str) -> Any | None: ...

    @overload
    async def get(self, key: str, value_type: type[T]) -> T | None: ...

    async def get(self, key: str, value_type: Any = None) -> Any | None:
        """Return the cached value for key, or None on miss.

        Args:
            key: Cache key (use taskboard.shared.cache_keys builders).
            value_type: Optional type to validate remote payloads into
                (e.g. TaskResult, list[str]). Local hits are returned as stored.

        Returns:
            Cached value, or None when absent, expired or the remote tier fails.
        """
        value = self.local.get(key)
        if value is not None:
            logger.debug("Cache HIT (local): %s", key)
            return value
        if self.remote is None or not await self._remote_ready():
            logger.debug("Cache MISS (local only): %s", key)
            return None
        try:
            payload = await asyncio.wait_for(
                self.remote.get(key), timeout=self.settings.operation_timeout
            )
            if payload is None:
                logger.debug("Cache MISS: %s", key)
                return None
            value = deserialize(key, payload, value_type)
        except Exception as e:
            self._degrade("get", key, e)
            return None
        self.local.set(key, value, self.settings.local_ttl)
        logger.debug("Cache HIT (remote): %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value in the local tier, then in the remote tier if available.

        Args:
            key: Cache key.
            value: Value to cache; must be JSON-serializable for the remote tier.
            ttl: Relative expiration; tier defaults apply when None.
        """
        self.local.set(key, value, ttl if ttl is not None else self.settings.local_ttl)
        logger.debug("Cache SET (local): %s", key)
        if self.remote is None or self.monitor.is_degraded:
            return
        try:
            payload = serialize(key, value)
            await asyncio.wait_for(
                self.remote.set(
                    key, payload, ttl if ttl is not None else self.settings.remote_ttl
                ),
                timeout=self.settings.operation_timeout,
            )
        except Exception as e:
            self._degrade("set", key, e)

    async def remove(self, key: str) -> None:
        """Remove an exact key, or every local key under a pattern key's prefix.

        Args:
            key: Exact key, or prefix followed by the wildcard (e.g. tasklist_*).
        """
        if is_pattern(key):
            removed = self.local.remove_by_prefix(pattern_prefix(key))
            logger.info("Cache INVALIDATE (local): %s (%s keys)", key, removed)
            if self.is_available() and not self._prefix_gap_reported:
                self._prefix_gap_reported = True
                logger.warning(
                    "Remote prefix removal not supported; entries matching %s "
                    "and later pattern keys expire on TTL",
                    key,
                )
            return
        self.local.remove(key)
        logger.debug("Cache DELETE (local): %s", key)
        if self.remote is None or self.monitor.is_degraded:
            return
        try:
            await asyncio.wait_for(
                self.remote.remove(key), timeout=self.settings.operation_timeout
            )
        except Exception as e:
            self._degrade("remove", key, e)

    async def close(self) -> None:
        """Release the remote tier client. Call on app shutdown."""
        if self.remote is not None:
            await self.remote.close()
