"""
Personal records router.

POST /records/check      — evaluate a stored exercise log for new PRs
GET  /records            — all records grouped by exercise
GET  /records/exercise   — records of one exercise (with previous values)
GET  /records/recent     — most recently achieved records
GET  /records/count      — record and exercise counts
GET  /records/timeline   — max-weight progression of one exercise
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.personal_record import PersonalRecord
from app.routers.exercises import pr_update_to_response
from app.schemas.common import ErrorResponse
from app.schemas.records import (
    ExercisePRsOut,
    PersonalRecordOut,
    PRCheckRequest,
    PRCheckResponse,
    PRCountOut,
    TimelinePointOut,
)
from app.services.logbook import get_exercise_log
from app.services.records import (
    evaluate_log,
    get_all_prs,
    get_pr_count,
    get_pr_timeline,
    get_prs_for_exercise,
    get_recent_prs,
    normalize_exercise_name,
)

router = APIRouter(prefix="/records", tags=["records"])


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def _record_to_response(pr: PersonalRecord) -> PersonalRecordOut:
    return PersonalRecordOut(
        id=pr.id,
        exercise_name=pr.exercise_name,
        pr_type=_ev(pr.pr_type),
        value=pr.value,
        reps=pr.reps,
        achieved_date=str(pr.achieved_date),
        previous_value=pr.previous_value,
        exercise_log_id=pr.exercise_log_id,
    )


@router.post(
    "/check",
    response_model=PRCheckResponse,
    summary="Check a stored exercise log for new personal records",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown exercise log."},
        409: {"model": ErrorResponse, "description": "Concurrent update; retry."},
    },
)
def check_records(payload: PRCheckRequest, db: Session = Depends(get_db)):
    """
    Re-running the check for a log that already set its records returns an
    empty list: ties never count as improvements.
    """
    log = get_exercise_log(db, payload.exercise_log_id)
    return PRCheckResponse(new_prs=[pr_update_to_response(u) for u in evaluate_log(db, log)])


@router.get("", response_model=list[ExercisePRsOut], summary="All records grouped by exercise")
def all_records(db: Session = Depends(get_db)):
    return [ExercisePRsOut(**group) for group in get_all_prs(db)]


@router.get("/exercise", response_model=ExercisePRsOut, summary="Records of one exercise")
def exercise_records(
    exercise_name: str = Query(min_length=1, examples=["Bench Press"]),
    db: Session = Depends(get_db),
):
    return ExercisePRsOut(
        exercise_name=normalize_exercise_name(exercise_name),
        **get_prs_for_exercise(db, exercise_name),
    )


@router.get("/recent", response_model=list[PersonalRecordOut], summary="Recently achieved records")
def recent_records(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return [_record_to_response(pr) for pr in get_recent_prs(db, limit=limit)]


@router.get("/count", response_model=PRCountOut, summary="Record counts")
def record_count(db: Session = Depends(get_db)):
    return PRCountOut(**get_pr_count(db))


@router.get(
    "/timeline",
    response_model=list[TimelinePointOut],
    summary="Max-weight progression of one exercise",
)
def record_timeline(
    exercise_name: str = Query(min_length=1, examples=["Bench Press"]),
    db: Session = Depends(get_db),
):
    return [TimelinePointOut(**point) for point in get_pr_timeline(db, exercise_name)]
