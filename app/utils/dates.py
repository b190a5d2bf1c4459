# app/utils/dates.py
# Timestamps are stored as naive UTC
from datetime import datetime, timedelta, timezone
from typing import Optional

_EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def epoch_micros(value: datetime) -> int:
    """Exact microseconds since the epoch for a naive UTC timestamp"""
    return (value - _EPOCH) // timedelta(microseconds=1)
