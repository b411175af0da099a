"""
DateTime utilities for pet health records.

This module provides the tolerant date decoder used for API payloads,
wire formatting helpers, and calendar-day helpers used by the status
classification functions.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from ..exceptions import DateParseException

# Ordered (label, strptime format) pairs tried by parse_api_datetime.
# Naive results are interpreted as UTC.
API_DATETIME_FORMATS: List[Tuple[str, str]] = [
    ("date", "%Y-%m-%d"),
    ("naive-datetime-microseconds", "%Y-%m-%dT%H:%M:%S.%f"),
    ("naive-datetime", "%Y-%m-%dT%H:%M:%S"),
    ("iso8601-fractional", "%Y-%m-%dT%H:%M:%S.%f%z"),
    ("iso8601", "%Y-%m-%dT%H:%M:%S%z"),
]

_DATE = r"\d{4}-\d{2}-\d{2}"
_TIME = r"T\d{2}:\d{2}:\d{2}"
_FRACTION = r"\.\d{1,6}"
_OFFSET = r"(?:Z|[+-]\d{2}:?\d{2})"

# strptime alone accepts unpadded fields, so each layout is also
# matched against its exact shape first.
_LAYOUT_PATTERNS = {
    "date": re.compile(_DATE),
    "naive-datetime-microseconds": re.compile(_DATE + _TIME + _FRACTION),
    "naive-datetime": re.compile(_DATE + _TIME),
    "iso8601-fractional": re.compile(_DATE + _TIME + _FRACTION + _OFFSET),
    "iso8601": re.compile(_DATE + _TIME + _OFFSET),
}

WIRE_DATE_FORMAT = "%Y-%m-%d"
WIRE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def get_current_utc() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(ZoneInfo("UTC"))


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime, convert an aware one to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_api_datetime(value: str) -> datetime:
    """
    Decode a date string emitted by the pet-management API.

    The server uses plain dates for vaccines and tablets and naive
    datetimes with microseconds for appointments, so each known layout
    is attempted in turn and the first success wins.

    Args:
        value: Raw string from the JSON payload

    Returns:
        Timezone-aware datetime (UTC when the string carried no offset)

    Raises:
        DateParseException: If no format matches; carries the raw string
    """
    for label, fmt in API_DATETIME_FORMATS:
        if not _LAYOUT_PATTERNS[label].fullmatch(value):
            continue
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return ensure_utc(parsed)

    raise DateParseException(
        value, attempted_formats=[label for label, _ in API_DATETIME_FORMATS]
    )


def coerce_api_datetime(value: Union[str, date, datetime]) -> datetime:
    """
    Normalise any accepted date input to an aware UTC datetime.

    Strings go through parse_api_datetime; ``date`` objects become UTC
    midnight; naive datetimes are assumed to be UTC.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_api_datetime(value)
    raise DateParseException(str(value))


def format_api_date(value: datetime) -> str:
    """Format a date-only field for the wire (YYYY-MM-DD, UTC calendar)."""
    return ensure_utc(value).strftime(WIRE_DATE_FORMAT)


def format_api_datetime(value: datetime) -> str:
    """Format a timestamp field for the wire (ISO-8601, UTC, Z suffix)."""
    return ensure_utc(value).strftime(WIRE_DATETIME_FORMAT)


def to_local(dt: datetime, tz: str = "UTC") -> datetime:
    """Convert an aware (or naive UTC) datetime to the given timezone."""
    return ensure_utc(dt).astimezone(ZoneInfo(tz))


def start_of_day(dt: datetime, tz: str = "UTC") -> datetime:
    """Get midnight of the calendar day containing ``dt`` in ``tz``."""
    local = to_local(dt, tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def is_same_day(first: datetime, second: datetime, tz: str = "UTC") -> bool:
    """Check whether two instants fall on the same calendar day in ``tz``."""
    return to_local(first, tz).date() == to_local(second, tz).date()


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Count complete 24-hour days from ``start`` to ``end``.

    Truncates toward zero, so an instant later today yields 0.
    """
    delta = ensure_utc(end) - ensure_utc(start)
    return int(delta / timedelta(days=1))


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware UTC datetime, defaulting to the clock."""
    if now is None:
        return get_current_utc()
    return ensure_utc(now)
