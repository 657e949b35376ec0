from datetime import date, timedelta
from typing import Optional, Tuple

WEEK_LENGTH = 7


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % WEEK_LENGTH)


def week_bounds(start: Optional[date], today: date) -> Tuple[date, date]:
    """Inclusive (first, last) days of the week to list.

    Without an explicit start the current week is used, Sunday to Saturday.
    """
    first = start if start is not None else start_of_week(today)
    return first, first + timedelta(days=WEEK_LENGTH - 1)
