"""
DateTime utility functions. Timestamps are stored and returned in UTC.
"""
from datetime import datetime, timezone
from typing import Optional


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is in UTC.
    Naive datetimes (SQLite drops tzinfo) are assumed to already be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def to_utc_isoformat(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to UTC and return as ISO format string
    (e.g., "2024-12-17T09:00:00+00:00"), or None if input is None.
    """
    utc_dt = to_utc(dt)
    if utc_dt is None:
        return None
    return utc_dt.isoformat()


def now_utc() -> datetime:
    """Current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
