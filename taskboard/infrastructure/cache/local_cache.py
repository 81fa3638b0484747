"""In-process cache tier with per-entry expiration.

Stores native Python values (no serialization). Expired entries are evicted
lazily on read, by prefix scans, and by a sweep that set() runs at most once
per sweep_interval. All operations hold a threading.Lock so the tier is safe
to share between request handlers running in different threads.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from threading import Lock
from typing import Any


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class LocalCache:
    """Thread-safe key/value store with absolute expiration per entry.

    Args:
        default_ttl: TTL applied when set() is called without one.
        clock: Monotonic seconds source; injectable for tests.
        sweep_interval: Minimum time between expiry sweeps run from set().
    """

    def __init__(
        self,
        default_ttl: timedelta = timedelta(minutes=10),
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: timedelta = timedelta(minutes=1),
    ) -> None:
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = Lock()
        self._next_sweep = clock() + sweep_interval.total_seconds()

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value, replacing any existing entry; expires at now + ttl.

        Also drops every expired entry once sweep_interval has elapsed since
        the previous sweep, so keys that are never read again do not pile up.
        """
        ttl = ttl if ttl is not None else self.default_ttl
        now = self._clock()
        with self._lock:
            self._entries[key] = _Entry(value, now + ttl.total_seconds())
            if now >= self._next_sweep:
                self._sweep(now)

    def remove(self, key: str) -> None:
        """Delete key if present."""
        with self._lock:
            self._entries.pop(key, None)

    def keys_with_prefix(self, prefix: str) -> list[str]:
        """Return live (non-expired) keys starting with prefix."""
        now = self._clock()
        with self._lock:
            return [
                key
                for key, entry in self._entries.items()
                if key.startswith(prefix) and entry.expires_at > now
            ]

    def remove_by_prefix(self, prefix: str) -> int:
        """Delete every entry whose key starts with prefix.

        Iterates a snapshot of the keys so the dict is never mutated while
        being enumerated.

        Returns:
            Number of entries removed (expired ones included).
        """
        with self._lock:
            matching = [key for key in list(self._entries) if key.startswith(prefix)]
            for key in matching:
                del self._entries[key]
        return len(matching)

    def purge_expired(self) -> int:
        """Drop all expired entries now. Returns the number removed."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        # Caller holds self._lock.
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self.sweep_interval.total_seconds()
        return len(expired)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    @property
    def stored_entries(self) -> int:
        """Number of entries held in memory, expired ones not yet evicted included."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for e in self._entries.values() if e.expires_at > now)
