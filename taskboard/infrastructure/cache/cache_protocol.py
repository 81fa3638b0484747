"""Remote cache tier protocol (DIP). Implemented by RedisRemoteCache."""

from datetime import timedelta
from typing import Protocol


class RemoteCacheProtocol(Protocol):
    """Byte-level contract for a networked cache backend.

    Every method may raise on network errors or hang; CacheService bounds
    each call with a timeout and treats any exception as a tier failure.
    """

    async def get(self, key: str) -> bytes | None:
        """Return raw payload or None if the key is absent."""
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Store payload with a relative expiration."""
        ...

    async def remove(self, key: str) -> None:
        """Delete key (no-op if absent)."""
        ...

    async def close(self) -> None:
        """Release the underlying connection pool."""
        ...
