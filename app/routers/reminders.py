"""
Reminder router.

POST /reminders              — create a reminder definition
GET  /reminders              — active reminders
POST /reminders/{id}/logs    — record completion / miss / skip / snooze
POST /reminders/{id}/toggle-pause — pause or resume
GET  /reminders/{id}/adherence — outcome counts over recent logs
"""
from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.reminder import Reminder, ReminderLog
from app.schemas.common import ErrorResponse
from app.schemas.reminders import (
    ReminderAdherenceOut,
    ReminderCreate,
    ReminderLogCreate,
    ReminderLogOut,
    ReminderOut,
)
from app.services.reminders import (
    create_reminder,
    list_active_reminders,
    log_reminder,
    reminder_adherence,
    toggle_pause,
)

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def _reminder_to_response(r: Reminder) -> ReminderOut:
    return ReminderOut(
        id=r.id,
        title=r.title,
        category=_ev(r.category),
        frequency=_ev(r.frequency),
        time=r.time,
        repeat_days=r.repeat_days,
        start_date=str(r.start_date),
        end_date=str(r.end_date) if r.end_date else None,
        is_active=r.is_active,
        is_paused=r.is_paused,
    )


def _log_to_response(log: ReminderLog) -> ReminderLogOut:
    return ReminderLogOut(
        id=log.id,
        reminder_id=log.reminder_id,
        day=str(log.day),
        scheduled_time=log.scheduled_time,
        status=_ev(log.status),
        completed_at=log.completed_at.isoformat() if log.completed_at else None,
    )


@router.post(
    "",
    response_model=ReminderOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reminder",
)
def add_reminder(payload: ReminderCreate, db: Session = Depends(get_db)):
    return _reminder_to_response(create_reminder(db, **payload.model_dump()))


@router.get("", response_model=list[ReminderOut], summary="List active reminders")
def active_reminders(db: Session = Depends(get_db)):
    return [_reminder_to_response(r) for r in list_active_reminders(db)]


@router.post(
    "/{reminder_id}/logs",
    response_model=ReminderLogOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log the outcome of a reminder occurrence",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder."}},
)
def add_reminder_log(
    reminder_id: int,
    payload: ReminderLogCreate,
    db: Session = Depends(get_db),
):
    """Only `completed` logs count toward weekly reminder adherence."""
    day: date = payload.day or datetime.now(tz=timezone.utc).date()
    log = log_reminder(
        db,
        reminder_id=reminder_id,
        status=payload.status,
        day=day,
        scheduled_time=payload.scheduled_time,
    )
    return _log_to_response(log)


@router.post(
    "/{reminder_id}/toggle-pause",
    response_model=ReminderOut,
    summary="Pause or resume a reminder",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder."}},
)
def pause_reminder(reminder_id: int, db: Session = Depends(get_db)):
    return _reminder_to_response(toggle_pause(db, reminder_id))


@router.get(
    "/{reminder_id}/adherence",
    response_model=ReminderAdherenceOut,
    summary="Adherence over the most recent logs",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder."}},
)
def adherence(
    reminder_id: int,
    days: int = Query(default=30, ge=1, le=365, description="Number of most recent logs to count."),
    db: Session = Depends(get_db),
):
    return ReminderAdherenceOut.model_validate(reminder_adherence(db, reminder_id, days))
