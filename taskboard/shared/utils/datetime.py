"""UTC helpers. Stored and returned datetimes are always timezone-aware UTC."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def utc_today() -> date:
    """Today's date in UTC; due dates and overdue checks compare against it."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC.

    SQLite hands back naive datetimes; those are assumed to already be UTC.
    Aware values in another zone are converted. None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
