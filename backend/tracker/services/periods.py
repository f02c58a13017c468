"""
Period windows for expense aggregation.

A window is an inclusive [start, end] range of naive local datetimes. The end
of a window is the last representable instant before the next window starts,
which with datetime's microsecond resolution is HH:59:59.999999.
"""

import calendar
import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, MINYEAR, MAXYEAR

from ..localtime import to_local, local_now

_ONE_MICROSECOND = timedelta(microseconds=1)

# A month window needs the first day of the following month
MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR - 1


class Period(str, enum.Enum):
    """Granularity of an aggregation window."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class InvalidPeriodError(ValueError):
    """Raised for a period unit that is not day, week, month or year."""


@dataclass(frozen=True)
class Window:
    """Inclusive range of local datetimes."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def parse_period(value: "Period | str") -> Period:
    """Coerce a string to a Period, rejecting unknown units."""
    if isinstance(value, Period):
        return value
    try:
        return Period(value)
    except ValueError:
        raise InvalidPeriodError(f"Invalid period: {value!r}") from None


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _first_of_next_month(year: int, month: int) -> datetime:
    if month == 12:
        return datetime(year + 1, 1, 1)
    return datetime(year, month + 1, 1)


def _add_months(moment: datetime, months: int) -> datetime:
    """Add months to a datetime, clamping day to valid range."""
    month = moment.month - 1 + months
    year = moment.year + month // 12
    month = month % 12 + 1
    max_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, max_day))


def month_window(year: int, month: int) -> Window:
    """Window covering one calendar month."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"Invalid year: {year}")
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    start = datetime(year, month, 1)
    # "Day 0" of the next month: one tick before it starts
    end = _first_of_next_month(year, month) - _ONE_MICROSECOND
    return Window(start=start, end=end)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before, rolling over January."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def resolve_window(period: Period | str, reference: datetime | None = None) -> Window:
    """
    Compute the window of the given unit that contains ``reference``.

    Weeks run Sunday through Saturday. ``reference`` defaults to now and is
    interpreted in local time.
    """
    period = parse_period(period)
    reference = to_local(reference) if reference is not None else local_now()

    if period == Period.DAY:
        start = _start_of_day(reference)
        return Window(start=start, end=start + timedelta(days=1) - _ONE_MICROSECOND)

    if period == Period.WEEK:
        # isoweekday(): Monday=1 .. Sunday=7, so Sunday maps to 0
        days_since_sunday = reference.isoweekday() % 7
        start = _start_of_day(reference) - timedelta(days=days_since_sunday)
        return Window(start=start, end=start + timedelta(days=7) - _ONE_MICROSECOND)

    if period == Period.MONTH:
        return month_window(reference.year, reference.month)

    return Window(
        start=datetime(reference.year, 1, 1),
        end=datetime(reference.year + 1, 1, 1) - _ONE_MICROSECOND,
    )


def step_back(period: Period | str, reference: datetime) -> datetime:
    """
    Move ``reference`` back by exactly one unit.

    Months and years clamp the day to the end of the target month, so
    March 31 steps back to February 28/29 rather than spilling into March.
    """
    period = parse_period(period)
    reference = to_local(reference)

    if period == Period.DAY:
        return reference - timedelta(days=1)
    if period == Period.WEEK:
        return reference - timedelta(days=7)
    if period == Period.MONTH:
        return _add_months(reference, -1)
    return _add_months(reference, -12)


def previous_window(period: Period | str, reference: datetime | None = None) -> Window:
    """Window of the same unit immediately before the one containing ``reference``."""
    reference = to_local(reference) if reference is not None else local_now()
    return resolve_window(period, step_back(period, reference))
