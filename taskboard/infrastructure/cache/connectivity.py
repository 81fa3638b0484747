"""Remote tier connectivity state: Available / Degraded with throttled probes.

One monitor instance is created per process (in the app lifespan) and
injected into CacheService. Any remote failure degrades immediately; only a
successful probe restores availability. Probes run at most once per retry
interval, and a caller that finds a probe already in flight does not wait
for it: it carries on as if still degraded.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

logger = logging.getLogger(__name__)


class ConnectivityMonitor:
    """Tracks whether the remote cache tier is considered reachable.

    Args:
        retry_interval: Minimum time between recovery probes while degraded.
        clock: Monotonic seconds source; injectable for tests.
    """

    def __init__(
        self,
        retry_interval: timedelta = timedelta(minutes=2),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.retry_interval = retry_interval
        self._clock = clock
        self._degraded = False
        self._last_probe_at: float | None = None
        self._probe_lock = asyncio.Lock()

    @property
    def is_degraded(self) -> bool:
        """True while the remote tier is being bypassed."""
        return self._degraded

    @property
    def seconds_since_last_probe(self) -> float | None:
        """Elapsed time since the last probe or failure, None if never."""
        if self._last_probe_at is None:
            return None
        return self._clock() - self._last_probe_at

    def mark_degraded(self, reason: str) -> None:
        """Switch to Degraded. The failure instant starts the retry interval."""
        if not self._degraded:
            logger.warning("Remote cache degraded, using local tier only: %s", reason)
        self._degraded = True
        self._last_probe_at = self._clock()

    def _retry_due(self) -> bool:
        if self._last_probe_at is None:
            return True
        elapsed = self._clock() - self._last_probe_at
        return elapsed >= self.retry_interval.total_seconds()

    async def try_recover(self, probe: Callable[[], Awaitable[Any]]) -> bool:
        """Probe the remote tier if degraded and a retry is due.

        The probe gate is acquired without waiting: when another caller holds
        it, this returns False immediately.

        Args:
            probe: Coroutine factory performing a cheap remote call; it must
                raise on failure and carry its own timeout.

        Returns:
            True if the remote tier is Available after the check.
        """
        if not self._degraded:
            return True
        if not self._retry_due() or self._probe_lock.locked():
            return False
        async with self._probe_lock:
            if not self._degraded:
                return True
            if not self._retry_due():
                return False
            self._last_probe_at = self._clock()
            try:
                await probe()
            except Exception as e:
                logger.debug("Remote cache probe failed: %r", e)
                self._last_probe_at = self._clock()
                return False
            self._degraded = False
            logger.info("Remote cache connection restored; remote tier re-enabled")
            return True
