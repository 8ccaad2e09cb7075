"""Pure duration and percentage helpers shared by the session domain."""

from datetime import datetime, timedelta, timezone
from typing import Union

Number = Union[int, float]

ONE_MINUTE = timedelta(minutes=1)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, floored.

    Negative when ``end`` precedes ``start``; callers decide the policy.

    Example:
        >>> t0 = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
        >>> elapsed_minutes(t0, t0 + timedelta(minutes=65, seconds=59))
        65
    """
    return (ensure_utc(end) - ensure_utc(start)) // ONE_MINUTE


def minutes_to_hours(minutes: Number, ndigits: int = 2) -> float:
    """Convert minutes to hours rounded to ``ndigits`` decimals."""
    return round(minutes / 60, ndigits)


def clamp(value: Number, lower: Number, upper: Number) -> Number:
    """Constrain ``value`` to the closed range [lower, upper]."""
    return max(lower, min(value, upper))


def percentage(part: Number, whole: Number, ndigits: int = 2) -> float:
    """``part`` as a percentage of ``whole``; 0.0 when ``whole`` is not positive."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, ndigits)
