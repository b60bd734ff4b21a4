"""Date and time utility functions.

Stored dates are ISO-8601 strings in UTC with millisecond precision and a
trailing ``Z``, so lexical order equals chronological order and range
queries can run directly on the string field.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

UTC_TZ = timezone.utc


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC_TZ)


def get_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name."""
    return ZoneInfo(name)


def to_iso(dt: datetime) -> str:
    """
    Format a datetime as a stored ISO-8601 string.

    Args:
        dt: Datetime to format (assumed UTC if no timezone)

    Returns:
        String like ``2025-01-05T18:30:00.000Z``
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC_TZ)
    return dt.astimezone(UTC_TZ).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(value: str) -> datetime:
    """Parse a stored ISO-8601 string back to an aware UTC datetime."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC_TZ)
    return dt.astimezone(UTC_TZ)


def _localize(dt: datetime, tz: ZoneInfo) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC_TZ)
    return dt.astimezone(tz)


def start_of_day(dt: datetime, tz: ZoneInfo) -> datetime:
    """Midnight of the local day containing ``dt``."""
    local = _localize(dt, tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime, tz: ZoneInfo) -> datetime:
    """Last millisecond of the local day containing ``dt``."""
    local = _localize(dt, tz)
    return local.replace(hour=23, minute=59, second=59, microsecond=999000)


def day_of_week(dt: datetime, tz: ZoneInfo, week_starts_on: int = 0) -> int:
    """
    Position of the local day within its week.

    Args:
        dt: Reference datetime
        tz: User-facing timezone
        week_starts_on: 0 = Sunday, 1 = Monday

    Returns:
        0 for the first day of the week up to 6 for the last
    """
    # isoweekday(): Monday=1 .. Sunday=7; map to Sunday=0 .. Saturday=6
    sunday_based = _localize(dt, tz).isoweekday() % 7
    return (sunday_based - week_starts_on) % 7


def start_of_week(dt: datetime, tz: ZoneInfo, week_starts_on: int = 0) -> datetime:
    """Local midnight at the start of the week containing ``dt``."""
    offset = day_of_week(dt, tz, week_starts_on)
    return start_of_day(dt, tz) - timedelta(days=offset)


def end_of_week(dt: datetime, tz: ZoneInfo, week_starts_on: int = 0) -> datetime:
    """Last millisecond of the week containing ``dt``."""
    week_start = start_of_week(dt, tz, week_starts_on)
    return end_of_day(week_start + timedelta(days=6), tz)
