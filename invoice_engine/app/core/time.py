"""Time utilities for timezone-aware UTC datetimes."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def epoch_millis(value: datetime | None = None) -> int:
    """Milliseconds since the epoch for ``value`` (defaults to now)."""
    moment = value or utc_now()
    return int(moment.timestamp() * 1000)
