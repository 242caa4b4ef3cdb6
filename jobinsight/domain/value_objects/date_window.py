"""
Date window value object and reporting-calendar helpers.

All instants handled by the store are naive UTC datetimes. Calendar
boundaries (day start, week start) are computed in the reporting timezone
and converted back to naive UTC.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

ONE_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] window of naive UTC instants."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime, tz: tzinfo) -> datetime:
    """Normalize a datetime to naive UTC; naive input is read in ``tz``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Convert a naive UTC instant to an aware datetime in ``tz``."""
    return value.replace(tzinfo=timezone.utc).astimezone(tz)


def local_midnight(day: date, tz: tzinfo) -> datetime:
    """Naive UTC instant of local midnight on ``day``."""
    return to_naive_utc(datetime.combine(day, time.min, tzinfo=tz), tz)


def day_start(now: datetime, tz: tzinfo) -> datetime:
    return local_midnight(to_local(now, tz).date(), tz)


def day_window(now: datetime, tz: tzinfo) -> DateWindow:
    """The full local calendar day containing ``now``."""
    today = to_local(now, tz).date()
    return DateWindow(
        start=local_midnight(today, tz),
        end=local_midnight(today + timedelta(days=1), tz) - ONE_MICROSECOND,
    )


def previous_day_window(now: datetime, tz: tzinfo) -> DateWindow:
    """The local calendar day before the one containing ``now``."""
    today = to_local(now, tz).date()
    return DateWindow(
        start=local_midnight(today - timedelta(days=1), tz),
        end=local_midnight(today, tz) - ONE_MICROSECOND,
    )


def previous_week_window(now: datetime, tz: tzinfo) -> DateWindow:
    """The last complete Monday-Sunday week before ``now``."""
    today = to_local(now, tz).date()
    this_monday = today - timedelta(days=today.weekday())
    return DateWindow(
        start=local_midnight(this_monday - timedelta(days=7), tz),
        end=local_midnight(this_monday, tz) - ONE_MICROSECOND,
    )


def trailing_window(now: datetime, days: int) -> DateWindow:
    """The ``days`` long window ending at ``now``."""
    return DateWindow(start=now - timedelta(days=days), end=now)
