"""Level based review intervals.

Each mastery level maps to a fixed number of days until the item is due
again. Levels move up and down with learner answers and the interval
follows the level.
"""
from __future__ import annotations

import datetime as dt

MIN_LEVEL = 0
MAX_LEVEL = 5

# Days until the next review, by mastery level
SRS_INTERVALS: dict[int, int] = {
    0: 0,   # same day
    1: 1,
    2: 3,
    3: 7,
    4: 14,
    5: 30,
}

DEFAULT_RECENT_WRONG_DAYS = 7


def clamp_level(level: int) -> int:
    """Force a mastery level into the valid range."""

    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def interval_days(level: int) -> int:
    """Return the review interval for ``level`` (clamped)."""

    return SRS_INTERVALS[clamp_level(level)]


def compute_next_due(level: int, today: dt.date) -> dt.date:
    """Return the date an item at ``level`` becomes due again."""

    return today + dt.timedelta(days=interval_days(level))


def _as_date(value: dt.date | dt.datetime) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def is_due(next_due_date: dt.date | dt.datetime | None, today: dt.date) -> bool:
    """Items never scheduled are always due; otherwise compare calendar days."""

    if next_due_date is None:
        return True
    return _as_date(next_due_date) <= _as_date(today)


def was_wrong_recently(
    last_wrong_date: dt.date | dt.datetime | None,
    today: dt.date,
    window_days: int = DEFAULT_RECENT_WRONG_DAYS,
) -> bool:
    """Return True when the last wrong answer falls inside the inclusive window."""

    if last_wrong_date is None:
        return False
    cutoff = _as_date(today) - dt.timedelta(days=window_days)
    return _as_date(last_wrong_date) >= cutoff
