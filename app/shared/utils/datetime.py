"""
UTC datetime utilities for consistent timezone handling.

All datetime values written by the service are timezone-aware UTC.
Documents written by the web UI carry a mix of Firestore timestamps,
``{"seconds": ...}`` maps and ISO strings; coerce_datetime reads all of them.
"""

from datetime import UTC, date, datetime, time
from typing import Any


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() / datetime.utcnow().

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Create a UTC-aware datetime from a Unix timestamp in seconds."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def epoch_millis(dt: datetime | None = None) -> int:
    """Milliseconds since the epoch for dt (default: now), as JavaScript Date.now()."""
    return int((dt or utc_now()).timestamp() * 1000)


def coerce_datetime(value: Any) -> datetime | None:
    """
    Read a date-like value stored by any client into a UTC datetime.

    Accepts datetime, date (midnight UTC), a Firestore-style map with
    ``seconds`` (and optional ``nanoseconds``), epoch seconds as int/float,
    and ISO 8601 strings. Returns None for anything else, including blank
    or unparseable strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        return from_timestamp_utc(float(seconds) + float(nanos) / 1e9)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return from_timestamp_utc(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None
