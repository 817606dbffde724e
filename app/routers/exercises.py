"""
Exercise log router.

POST   /exercises                 — log an exercise and check it for personal records
GET    /exercises                 — logs of one day, or the most recent ones
PATCH  /exercises/{log_id}        — edit a log
DELETE /exercises/{log_id}        — remove a log
GET    /exercises/week-summary    — exercise count per day in a date range
GET    /exercises/month-summary   — calendar view of one month
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.exercise_log import ExerciseLog
from app.schemas.common import ErrorResponse
from app.schemas.logs import (
    ExerciseLogCreate,
    ExerciseLogCreatedResponse,
    ExerciseLogOut,
    ExerciseLogUpdate,
    MonthSummaryOut,
    PRUpdateOut,
)
from app.services.logbook import (
    create_exercise_log,
    delete_exercise_log,
    list_exercise_logs,
    month_summary,
    update_exercise_log,
    week_summary,
)
from app.services.records import PRUpdate, evaluate_log

router = APIRouter(prefix="/exercises", tags=["exercises"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _ev(v) -> str:
    """Extract bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


def exercise_log_to_response(log: ExerciseLog) -> ExerciseLogOut:
    return ExerciseLogOut(
        id=log.id,
        day=str(log.day),
        exercise_name=log.exercise_name,
        muscle_group=_ev(log.muscle_group) if log.muscle_group else None,
        sets=log.sets,
        reps=log.reps,
        weight=log.weight,
        duration=log.duration,
        notes=log.notes,
    )


def pr_update_to_response(upd: PRUpdate) -> PRUpdateOut:
    return PRUpdateOut(type=upd.type, value=upd.value, previous_value=upd.previous_value)


# ---------------------------------------------------------------------------
# POST /exercises
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=ExerciseLogCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log an exercise",
    responses={
        409: {"model": ErrorResponse, "description": "Concurrent PR update; nothing was stored, repeat the request."},
        422: {"description": "Validation error (non-positive sets/reps, empty name, etc.)"},
    },
)
def log_exercise(payload: ExerciseLogCreate, db: Session = Depends(get_db)):
    """
    Store the exercise log, then evaluate it against the exercise's
    personal records (max weight, max volume, estimated 1RM).

    `new_prs` lists every record the log beat; empty for a normal set.
    """
    log = create_exercise_log(db, payload.model_dump())
    new_prs = evaluate_log(db, log)
    return ExerciseLogCreatedResponse(
        log=exercise_log_to_response(log),
        new_prs=[pr_update_to_response(u) for u in new_prs],
    )


# ---------------------------------------------------------------------------
# GET /exercises
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[ExerciseLogOut],
    summary="List exercise logs",
)
def list_exercises(
    day: Optional[date] = Query(
        default=None,
        description="Return every log of this day. Omit for the most recent logs.",
        examples=["2026-02-20"],
    ),
    limit: int = Query(default=20, ge=1, le=200, description="Page size when `day` is omitted."),
    db: Session = Depends(get_db),
):
    return [exercise_log_to_response(log) for log in list_exercise_logs(db, day=day, limit=limit)]


# ---------------------------------------------------------------------------
# Calendar summaries
# ---------------------------------------------------------------------------

@router.get("/week-summary", response_model=dict[str, int], summary="Exercises per day")
def exercises_per_day(
    start: date = Query(examples=["2026-02-16"]),
    end: date = Query(examples=["2026-02-22"]),
    db: Session = Depends(get_db),
):
    """`{"2026-02-16": 4, ...}`; days without logs are omitted."""
    return week_summary(db, start, end)


@router.get("/month-summary", response_model=MonthSummaryOut, summary="Monthly calendar")
def exercise_calendar(
    year: int = Query(ge=2000, le=2100, examples=[2026]),
    month: int = Query(ge=1, le=12, examples=[2]),
    db: Session = Depends(get_db),
):
    return MonthSummaryOut(**asdict(month_summary(db, year, month)))


# ---------------------------------------------------------------------------
# PATCH / DELETE /exercises/{log_id}
# ---------------------------------------------------------------------------

@router.patch(
    "/{log_id}",
    response_model=ExerciseLogOut,
    summary="Edit an exercise log",
    responses={404: {"model": ErrorResponse, "description": "Unknown exercise log."}},
)
def edit_exercise(log_id: int, payload: ExerciseLogUpdate, db: Session = Depends(get_db)):
    """
    Only fields present and non-null in the body are written. Records the log
    already set are not recomputed; use `POST /records/check` to evaluate the
    edited values.
    """
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return exercise_log_to_response(update_exercise_log(db, log_id, fields))


@router.delete(
    "/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an exercise log",
    responses={404: {"model": ErrorResponse, "description": "Unknown exercise log."}},
)
def remove_exercise(log_id: int, db: Session = Depends(get_db)):
    """Personal records and unlocked badges earned through the log are kept."""
    delete_exercise_log(db, log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
