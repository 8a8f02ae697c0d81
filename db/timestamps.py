"""Timestamp conversion between Python and the database.

All timestamps are stored as fixed-width ISO-8601 UTC strings, so comparing
the stored text compares the instants.
"""

from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC. Naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db(value: datetime) -> str:
    """Format a datetime for storage."""
    return to_utc(value).isoformat(timespec="microseconds")


def from_db(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp, passing None through."""
    if value is None:
        return None
    return to_utc(datetime.fromisoformat(value))


def parse_timestamp(value) -> datetime:
    """Coerce a datetime, date or ISO-8601 string to an aware UTC datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        return to_utc(datetime.fromisoformat(value.strip()))
    raise ValueError(f"Not a timestamp: {value!r}")
