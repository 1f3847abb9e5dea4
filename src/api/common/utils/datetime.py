from datetime import datetime, timezone, timedelta
from typing import Optional


def get_current_datetime() -> datetime:
    """Return current UTC datetime with timezone info."""
    # First create a UTC datetime
    dt = datetime.now(timezone.utc)
    # Ensure microseconds are stripped for consistency in tests
    dt = dt.replace(microsecond=0)
    # Double-check timezone info is present
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes and convert aware ones to UTC.

    SQLite hands back naive values for DateTime(timezone=True) columns,
    all of which are written in UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_cutoff_datetime(days_old: int, now: Optional[datetime] = None) -> datetime:
    """
    Get the instant that lies `days_old` days before `now`.

    Args:
        days_old: Number of days to go back
        now: Reference instant, defaults to the current UTC time

    Returns:
        UTC datetime of the cutoff
    """
    reference = ensure_utc(now) if now is not None else get_current_datetime()
    return reference - timedelta(days=days_old)


def is_same_month(value: Optional[datetime], reference: datetime) -> bool:
    """Check whether two instants fall in the same calendar month (UTC)."""
    value = ensure_utc(value)
    if value is None:
        return False
    reference = ensure_utc(reference)
    return value.year == reference.year and value.month == reference.month


def is_same_year(value: Optional[datetime], reference: datetime) -> bool:
    """Check whether two instants fall in the same calendar year (UTC)."""
    value = ensure_utc(value)
    if value is None:
        return False
    return value.year == ensure_utc(reference).year
