"""
UTC-first datetime utilities.

All timestamps handled by the service are timezone-aware UTC datetimes.
Naive datetimes coming in from clients are assumed to already be UTC, so
records written with and without an offset still sort against each other.

Usage:
    from health_chat.core.datetime_utils import utc_now, to_utc, to_db_string

    now = utc_now()
    stored = to_db_string(now)          # "2025-01-15T05:00:00.123456+00:00"
    restored = from_db_string(stored)
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Get current datetime in UTC with timezone info."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If datetime is naive (no timezone), assumes it's already UTC
    - If datetime has timezone, converts to UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO 8601 string (or pass through a datetime) as a UTC datetime.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return to_utc(value)

    if not isinstance(value, str):
        raise ValueError(f"Expected datetime or string, got {type(value).__name__}")

    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return to_utc(datetime.fromisoformat(value))


def to_db_string(dt: datetime) -> str:
    """
    Serialize a datetime for SQLite storage.

    Keeps microseconds: two turns of one chat exchange are stamped
    within the same second and must still compare in order.
    """
    return to_utc(dt).isoformat()


def from_db_string(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored datetime string, returning None if it is missing or invalid."""
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        logger.warning(f"Failed to parse stored datetime '{value}': {e}")
        return None
