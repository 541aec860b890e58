# medcare/core/scheduling.py
from datetime import datetime
from typing import Optional

DEFAULT_CONFLICT_SECONDS = 1800


def second_of_day(dt: datetime) -> int:
    return dt.hour * 3600 + dt.minute * 60 + dt.second


def within_window(a: Optional[datetime],
                  b: Optional[datetime],
                  window_seconds: int = DEFAULT_CONFLICT_SECONDS) -> bool:
    """
    True when both times fall on the same calendar date and their
    time-of-day differs by less than `window_seconds`.
    Symmetric; a missing side never matches.
    """
    if a is None or b is None:
        return False
    if a.date() != b.date():
        return False
    return abs(second_of_day(a) - second_of_day(b)) < window_seconds
