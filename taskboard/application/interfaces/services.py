"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class ICacheService(Protocol):
    """Cache-aside port used by application services.

    Implementations must never raise for backend failures: a failing or
    unreachable backend reads as a miss and writes as accepted.
    """

    async def get(self, key: str, value_type: Any = None) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value with optional TTL (backend default when None)."""

    async def remove(self, key: str) -> None:
        """Delete key, or every key under a prefix when key ends with '*'."""
