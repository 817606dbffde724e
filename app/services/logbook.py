"""
Logbook service: exercise and meal log storage plus the per-day summary.

Public API
----------
create_exercise_log(db, fields)          -> ExerciseLog   (flush only)
update_exercise_log(db, log_id, fields)  -> ExerciseLog
delete_exercise_log(db, log_id)
list_exercise_logs(db, day, limit)       -> list[ExerciseLog]
get_exercise_log(db, log_id)             -> ExerciseLog
create_meal_log(db, fields)              -> MealLog
delete_meal_log(db, log_id)
list_meal_logs(db, day, limit)           -> list[MealLog]
week_summary(db, start, end)             -> dict[str, int]
month_summary(db, year, month)           -> MonthSummary
daily_summary(db, day)                   -> DailySummary

Editing or deleting a log never revises personal records or badge unlocks:
both are history and stay as they were earned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ExerciseLogNotFoundError, MealLogNotFoundError
from app.models.exercise_log import ExerciseLog
from app.models.meal_log import MealLog
from app.models.personal_record import PersonalRecord
from app.services.profile import get_targets


@dataclass
class DailySummary:
    day: date
    calories_consumed: float
    calorie_target: int
    protein_consumed: float
    protein_target: int
    meal_count: int
    exercise_count: int


@dataclass
class CalendarDay:
    count: int = 0
    muscle_groups: list[str] = field(default_factory=list)
    exercises: list[str] = field(default_factory=list)


@dataclass
class MonthSummary:
    year: int
    month: int
    by_date: dict[str, CalendarDay]
    total_workouts: int
    total_exercises: int


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


# ---------------------------------------------------------------------------
# Exercise logs
# ---------------------------------------------------------------------------

def create_exercise_log(db: Session, fields: dict[str, Any]) -> ExerciseLog:
    """
    Stage a new log and flush it so it has an id. Does not commit: the PR
    evaluation that follows commits the log together with any records, or
    rolls both back on a conflict.
    """
    fields = dict(fields)
    fields["day"] = fields.get("day") or _today()
    log = ExerciseLog(**fields)
    db.add(log)
    db.flush()
    return log


def get_exercise_log(db: Session, log_id: int) -> ExerciseLog:
    log = db.get(ExerciseLog, log_id)
    if log is None:
        raise ExerciseLogNotFoundError(log_id)
    return log


def update_exercise_log(db: Session, log_id: int, fields: dict[str, Any]) -> ExerciseLog:
    """Patch the given fields. PRs already set by this log are left alone."""
    log = get_exercise_log(db, log_id)
    for key, value in fields.items():
        setattr(log, key, value)
    db.commit()
    db.refresh(log)
    return log


def delete_exercise_log(db: Session, log_id: int) -> None:
    log = get_exercise_log(db, log_id)
    # Records it set survive; only their link to the log is cleared.
    db.query(PersonalRecord).filter(PersonalRecord.exercise_log_id == log.id).update(
        {PersonalRecord.exercise_log_id: None}, synchronize_session=False
    )
    db.delete(log)
    db.commit()


def list_exercise_logs(
    db: Session, day: Optional[date] = None, limit: int = 20
) -> list[ExerciseLog]:
    """Logs of one day (all of them), or the most recent `limit` logs."""
    q = db.query(ExerciseLog)
    if day is not None:
        return q.filter(ExerciseLog.day == day).order_by(ExerciseLog.id).all()
    return q.order_by(ExerciseLog.day.desc(), ExerciseLog.id.desc()).limit(limit).all()


# ---------------------------------------------------------------------------
# Meal logs
# ---------------------------------------------------------------------------

def create_meal_log(db: Session, fields: dict[str, Any]) -> MealLog:
    fields = dict(fields)
    fields["day"] = fields.get("day") or _today()
    log = MealLog(**fields)
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


def delete_meal_log(db: Session, log_id: int) -> None:
    log = db.get(MealLog, log_id)
    if log is None:
        raise MealLogNotFoundError(log_id)
    db.delete(log)
    db.commit()


def list_meal_logs(db: Session, day: Optional[date] = None, limit: int = 20) -> list[MealLog]:
    q = db.query(MealLog)
    if day is not None:
        return q.filter(MealLog.day == day).order_by(MealLog.id).all()
    return q.order_by(MealLog.day.desc(), MealLog.id.desc()).limit(limit).all()


# ---------------------------------------------------------------------------
# Daily summary
# ---------------------------------------------------------------------------

def daily_summary(db: Session, day: Optional[date] = None) -> DailySummary:
    """Calories / protein consumed against targets and exercise count for one day."""
    target = day or _today()
    calories, protein, meals = (
        db.query(
            func.coalesce(func.sum(MealLog.calories), 0),
            func.coalesce(func.sum(MealLog.protein), 0),
            func.count(MealLog.id),
        )
        .filter(MealLog.day == target)
        .one()
    )
    exercises: int = (
        db.query(func.count(ExerciseLog.id)).filter(ExerciseLog.day == target).scalar() or 0
    )
    targets = get_targets(db)
    return DailySummary(
        day=target,
        calories_consumed=float(calories),
        calorie_target=targets.calories,
        protein_consumed=float(protein),
        protein_target=targets.protein,
        meal_count=meals,
        exercise_count=exercises,
    )


# ---------------------------------------------------------------------------
# Calendar summaries
# ---------------------------------------------------------------------------

def week_summary(db: Session, start: date, end: date) -> dict[str, int]:
    """Exercise count per logged day in [start, end]; days without logs are absent."""
    rows = (
        db.query(ExerciseLog.day, func.count(ExerciseLog.id))
        .filter(ExerciseLog.day >= start, ExerciseLog.day <= end)
        .group_by(ExerciseLog.day)
        .order_by(ExerciseLog.day)
        .all()
    )
    return {str(day): count for day, count in rows}


def month_summary(db: Session, year: int, month: int) -> MonthSummary:
    """
    Per-day exercise count, distinct muscle groups (first-seen order) and
    exercise names for one calendar month.
    """
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    logs = (
        db.query(ExerciseLog)
        .filter(ExerciseLog.day >= start, ExerciseLog.day < end)
        .order_by(ExerciseLog.day, ExerciseLog.id)
        .all()
    )
    by_date: dict[str, CalendarDay] = {}
    for log in logs:
        entry = by_date.setdefault(str(log.day), CalendarDay())
        entry.count += 1
        if log.muscle_group and _ev(log.muscle_group) not in entry.muscle_groups:
            entry.muscle_groups.append(_ev(log.muscle_group))
        entry.exercises.append(log.exercise_name)

    return MonthSummary(
        year=year,
        month=month,
        by_date=by_date,
        total_workouts=len(by_date),
        total_exercises=len(logs),
    )
