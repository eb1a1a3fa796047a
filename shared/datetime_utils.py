"""
Date/time conversion utilities — framework-agnostic.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def ensure_utc(value: datetime) -> datetime:
    """Return *value* as a timezone-aware UTC datetime.

    Naive datetimes (no ``tzinfo``) are assumed to be UTC; pymongo hands them
    back that way unless the client is created with ``tz_aware=True``.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so the value survives a BSON round trip."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


def to_unix(value: Optional[datetime]) -> Optional[int]:
    """Convert a datetime to integer Unix epoch seconds (``None`` passes through)."""
    if value is None:
        return None
    return int(ensure_utc(value).timestamp())


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO 8601 UTC string ending in ``Z``."""
    if value is None:
        return None
    return ensure_utc(value).isoformat().replace("+00:00", "Z")
