"""Calendar helpers shared by the habit stores and the summary engine."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def start_of_day(value: Optional[DateLike] = None) -> date:
    """Truncate a timestamp to its local calendar day.

    Naive datetimes are taken as local time; aware ones are converted to the
    local zone before truncation. ``None`` means now.
    """
    if value is None:
        return datetime.now().date()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def weekday_of(value: DateLike) -> int:
    """Day-of-week index with 0 = Sunday .. 6 = Saturday."""
    # date.weekday() is Monday-based
    return (start_of_day(value).weekday() + 1) % 7


def today() -> date:
    return start_of_day()
