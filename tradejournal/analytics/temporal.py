"""Calendar bucketing helpers.

Keys and boundaries are computed from a datetime's own wall-clock fields,
so callers decide the local calendar by choosing the timezone the
datetimes are expressed in. Boundaries of aware datetimes stay in the
same zone, with the UTC offset in effect at the boundary itself.
"""

from datetime import datetime, timedelta
from typing import Iterable, TypeVar

import pytz

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Trading week order for display: Mon-Fri, then the weekend.
DISPLAY_WEEKDAY_ORDER = (1, 2, 3, 4, 5, 6, 0)

T = TypeVar("T")


def day_key(d: datetime) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def week_key(d: datetime) -> str:
    """Format the ISO-8601 week of a date as ``YYYY-Www``.

    Weeks start on Monday and week 1 is the week containing the year's
    first Thursday, so late December dates can belong to week 1 of the
    next ISO year and early January dates to week 52/53 of the previous.
    """
    iso_year, iso_week, _ = d.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def month_key(d: datetime) -> str:
    """Format a date as ``YYYY-MM``."""
    return f"{d.year:04d}-{d.month:02d}"


def weekday_index(d: datetime) -> int:
    """Natural weekday index, 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def weekday_label(index: int) -> str:
    return WEEKDAY_LABELS[index]


def hour_of_day(d: datetime) -> int:
    return d.hour


def hour_label(hour: int) -> str:
    """Format an hour as 12AM, 1AM .. 12PM .. 11PM."""
    if hour == 0:
        return "12AM"
    if hour == 12:
        return "12PM"
    if hour < 12:
        return f"{hour}AM"
    return f"{hour - 12}PM"


def _wall_clock(d: datetime) -> datetime:
    return d.replace(tzinfo=None)


def in_zone_of(d: datetime, wall: datetime) -> datetime:
    """Attach ``d``'s zone to a naive wall-clock time.

    pytz zones carry a fixed offset per instance, so they are localized to
    pick the offset valid at ``wall`` rather than the one valid at ``d``.
    """
    tz = d.tzinfo
    if tz is None:
        return wall
    if hasattr(tz, "localize"):
        return tz.localize(wall)
    return wall.replace(tzinfo=tz)


def _day_start(wall: datetime) -> datetime:
    return wall.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_end(wall: datetime) -> datetime:
    return wall.replace(hour=23, minute=59, second=59, microsecond=999000)


def _week_start(wall: datetime) -> datetime:
    return _day_start(wall) - timedelta(days=wall.weekday())


def _month_last_day(wall: datetime) -> datetime:
    if wall.month == 12:
        next_month = wall.replace(year=wall.year + 1, month=1, day=1)
    else:
        next_month = wall.replace(month=wall.month + 1, day=1)
    return next_month - timedelta(days=1)


def day_start(d: datetime) -> datetime:
    return in_zone_of(d, _day_start(_wall_clock(d)))


def day_end(d: datetime) -> datetime:
    return in_zone_of(d, _day_end(_wall_clock(d)))


def week_start(d: datetime) -> datetime:
    """Monday 00:00:00.000 of the week containing ``d``."""
    return in_zone_of(d, _week_start(_wall_clock(d)))


def week_end(d: datetime) -> datetime:
    """Sunday 23:59:59.999 of the week containing ``d``."""
    return in_zone_of(d, _day_end(_week_start(_wall_clock(d)) + timedelta(days=6)))


def month_start(d: datetime) -> datetime:
    return in_zone_of(d, _day_start(_wall_clock(d).replace(day=1)))


def month_end(d: datetime) -> datetime:
    """Last millisecond of the month containing ``d``."""
    return in_zone_of(d, _day_end(_month_last_day(_wall_clock(d))))


def week_label(d: datetime) -> str:
    monday = _week_start(_wall_clock(d))
    return f"Week of {monday:%b} {monday.day}"


def month_label(d: datetime) -> str:
    return f"{d:%B} {d.year}"


def instant(d: datetime) -> datetime:
    """Sort key placing naive and aware datetimes on one timeline.

    Naive values are taken as UTC, the same convention snapshot loading
    uses.
    """
    if d.tzinfo is None:
        return pytz.utc.localize(d)
    return d


def chronological(trades: Iterable[T]) -> list[T]:
    """Trades ordered by exit time, oldest first.

    The sort is stable, so trades closing at the same instant keep their
    input order.
    """
    return sorted(trades, key=lambda trade: instant(trade.exit_time))


def most_recent_first(periods: Iterable[T]) -> list[T]:
    """Period summaries ordered by period start, newest first."""
    return sorted(periods, key=lambda period: instant(period.start_date), reverse=True)
