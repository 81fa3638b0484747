"""Shared utilities: datetime."""

from taskboard.shared.utils.datetime import ensure_utc, utc_now, utc_today

__all__ = [
    "utc_now",
    "utc_today",
    "ensure_utc",
]
