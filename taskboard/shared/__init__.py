"""Shared utilities: cache keys, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from taskboard.shared.utils import ensure_utc, utc_now, utc_today

__all__ = [
    "utc_now",
    "utc_today",
    "ensure_utc",
]
