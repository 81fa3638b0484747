"""Infrastructure exceptions for cache tiers.

Cache errors extend TaskboardException for consistent error_code/details,
but the tiered CacheService catches them: they never reach callers.
"""

from taskboard.domain.exceptions import TaskboardException


class CacheException(TaskboardException):
    """Base exception for cache tier operations."""


class RemoteCacheUnavailableError(CacheException):
    """Remote tier call failed (connection error, timeout or cancellation)."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            f"Remote cache {operation} failed for key: {key}",
            "REMOTE_CACHE_UNAVAILABLE",
            {"operation": operation, "key": key, "reason": reason},
        )


class CacheSerializationError(CacheException):
    """Value could not be encoded for, or decoded from, the remote tier."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Cache serialization failed for key: {key}",
            "CACHE_SERIALIZATION_ERROR",
            {"key": key, "reason": reason},
        )
