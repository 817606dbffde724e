"""
Reminder service: reminder definitions, their completion log, pause state
and per-reminder adherence. Delivery scheduling is handled elsewhere.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ReminderNotFoundError
from app.core.numbers import round_int
from app.models.reminder import Reminder, ReminderLog, ReminderStatus


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def create_reminder(
    db: Session,
    title: str,
    category: str,
    frequency: str,
    time: str,
    start_date: date,
    repeat_days: Optional[list[str]] = None,
    end_date: Optional[date] = None,
) -> Reminder:
    reminder = Reminder(
        title=title,
        category=category,
        frequency=frequency,
        time=time,
        repeat_days=repeat_days,
        start_date=start_date,
        end_date=end_date,
        is_active=True,
        is_paused=False,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def list_active_reminders(db: Session) -> list[Reminder]:
    return db.query(Reminder).filter(Reminder.is_active == True).order_by(Reminder.id).all()  # noqa


def log_reminder(
    db: Session,
    reminder_id: int,
    status: str,
    day: date,
    scheduled_time: Optional[str] = None,
) -> ReminderLog:
    """Record what happened to one occurrence of a reminder."""
    reminder = get_reminder(db, reminder_id)
    entry = ReminderLog(
        reminder_id=reminder.id,
        day=day,
        scheduled_time=scheduled_time or reminder.time,
        status=status,
        completed_at=(
            datetime.now(tz=timezone.utc) if status == ReminderStatus.completed.value else None
        ),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_reminder(db: Session, reminder_id: int) -> Reminder:
    reminder = db.get(Reminder, reminder_id)
    if reminder is None:
        raise ReminderNotFoundError(reminder_id)
    return reminder


def toggle_pause(db: Session, reminder_id: int) -> Reminder:
    """Flip is_paused. Paused reminders still count toward weekly adherence."""
    reminder = get_reminder(db, reminder_id)
    reminder.is_paused = not reminder.is_paused
    db.commit()
    db.refresh(reminder)
    return reminder


@dataclass
class ReminderAdherence:
    completed: int
    missed: int
    skipped: int
    total: int
    adherence_rate: int


def reminder_adherence(db: Session, reminder_id: int, days: int = 30) -> ReminderAdherence:
    """
    Outcome counts over the reminder's `days` most recent logs.
    adherence_rate is 0 when nothing has been logged.
    """
    get_reminder(db, reminder_id)
    logs = (
        db.query(ReminderLog)
        .filter(ReminderLog.reminder_id == reminder_id)
        .order_by(ReminderLog.day.desc(), ReminderLog.id.desc())
        .limit(days)
        .all()
    )
    counts = Counter(_ev(log.status) for log in logs)
    total = len(logs)
    completed = counts[ReminderStatus.completed.value]
    return ReminderAdherence(
        completed=completed,
        missed=counts[ReminderStatus.missed.value],
        skipped=counts[ReminderStatus.skipped.value],
        total=total,
        adherence_rate=round_int(completed / total * 100) if total else 0,
    )
