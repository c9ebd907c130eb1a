"""Time helpers. Every timestamp in the system is a timezone-aware UTC value."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Coerce ``value`` to aware UTC.

    Naive values are assumed to already be UTC (SQLite drops ``tzinfo`` on
    round-trip); aware values are converted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
