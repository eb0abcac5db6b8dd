"""
Time-related utilities for the application.

All timestamps are generated in UTC. MongoDB stores datetimes with
millisecond precision, so stored timestamps are truncated to the
millisecond to compare equal after a round trip.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes returned by the MongoDB driver."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
