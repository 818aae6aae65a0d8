"""Date manipulation utilities"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes from the store as UTC"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def is_within_validity(start: Optional[datetime], end: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Check now against an optional [start, end] window (open ends always pass)"""
    now = as_aware(now) or utc_now()
    start = as_aware(start)
    end = as_aware(end)

    if start and now < start:
        return False
    if end and now > end:
        return False
    return True
