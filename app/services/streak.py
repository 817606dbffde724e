"""
Streak calculator — consecutive-day run detection.

A streak is the number of consecutive calendar days carrying at least one
log. The current streak must end today or yesterday (one day of grace);
anything older means the streak is broken and counts as 0.

Public API
----------
compute_streak(dates, today)   -> StreakResult   (pure)
current_streak(dates, today)   -> int            (pure)
longest_streak(dates)          -> int            (pure)
exercise_streak(db, today)     -> StreakResult   (exercise log days)
meal_streak(db, today)         -> StreakResult   (meal log days)

Every streak in the app goes through this module; callers only decide which
log table supplies the dates.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from app.models.exercise_log import ExerciseLog
from app.models.meal_log import MealLog

DateLike = Union[date, str]

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakResult:
    current: int
    longest: int


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _distinct_days_desc(dates: Iterable[DateLike]) -> list[date]:
    """Parse, de-duplicate and sort newest first. Malformed strings raise ValueError."""
    days = {d if isinstance(d, date) else date.fromisoformat(d) for d in dates}
    return sorted(days, reverse=True)


def _current(days_desc: list[date], today: date) -> int:
    if not days_desc:
        return 0
    latest = days_desc[0]
    if latest != today and latest != today - _ONE_DAY:
        return 0

    present = set(days_desc)
    streak = 0
    expected = latest
    while expected in present:
        streak += 1
        expected -= _ONE_DAY
    return streak


def _longest(days_desc: list[date]) -> int:
    if not days_desc:
        return 0
    longest = 0
    run = 1
    for newer, older in zip(days_desc, days_desc[1:]):
        if (newer - older).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    return max(longest, run)


def current_streak(dates: Iterable[DateLike], today: Optional[date] = None) -> int:
    return _current(_distinct_days_desc(dates), today or _today())


def longest_streak(dates: Iterable[DateLike]) -> int:
    return _longest(_distinct_days_desc(dates))


def compute_streak(dates: Iterable[DateLike], today: Optional[date] = None) -> StreakResult:
    """Current and longest streak over a collection of activity days (duplicates allowed)."""
    days = _distinct_days_desc(dates)
    return StreakResult(current=_current(days, today or _today()), longest=_longest(days))


# ---------------------------------------------------------------------------
# Adapters — one per log table
# ---------------------------------------------------------------------------

def exercise_streak(db: Session, today: Optional[date] = None) -> StreakResult:
    rows = db.query(ExerciseLog.day).distinct().all()
    return compute_streak((r.day for r in rows), today)


def meal_streak(db: Session, today: Optional[date] = None) -> StreakResult:
    rows = db.query(MealLog.day).distinct().all()
    return compute_streak((r.day for r in rows), today)
