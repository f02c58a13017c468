"""
Local wall-clock helpers.

Expense dates are stored as naive datetimes in the server's local time, so
"same day" or "same month" comparisons use the calendar the user sees rather
than UTC instants. Anything timezone-aware is converted on the way in.
"""

from datetime import datetime


def to_local(moment: datetime) -> datetime:
    """Convert a datetime to a naive local datetime."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def local_now() -> datetime:
    return datetime.now()
