"""
Progress router — derived signals over the raw logs.

GET /progress/streaks        — exercise and meal streaks
GET /progress/daily          — one day's intake vs targets and exercise count
GET /progress/weekly-report  — graded weekly scorecard
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.progress import (
    DailySummaryResponse,
    StreakOut,
    StreaksResponse,
    WeeklyScorecardResponse,
)
from app.services.logbook import daily_summary
from app.services.scorecard import WeeklyScorecard, build_weekly_scorecard
from app.services.streak import exercise_streak, meal_streak

router = APIRouter(prefix="/progress", tags=["progress"])


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _scorecard_to_response(card: WeeklyScorecard) -> WeeklyScorecardResponse:
    return WeeklyScorecardResponse(
        week_start=str(card.week_start),
        week_end=str(card.week_end),
        workout=asdict(card.workout),
        nutrition=asdict(card.nutrition),
        reminders=asdict(card.reminders),
        streaks=asdict(card.streaks),
        overall_grade=card.overall_grade,
        overall_score=card.overall_score,
        insights=card.insights,
    )


# ---------------------------------------------------------------------------
# GET /progress/streaks
# ---------------------------------------------------------------------------

@router.get("/streaks", response_model=StreaksResponse, summary="Exercise and meal streaks")
def streaks(db: Session = Depends(get_db)):
    """
    Current streak counts consecutive logged days ending today or yesterday
    (UTC); it is 0 once a full day has been missed.
    """
    ex = exercise_streak(db)
    ml = meal_streak(db)
    return StreaksResponse(
        exercise=StreakOut(current=ex.current, longest=ex.longest),
        meals=StreakOut(current=ml.current, longest=ml.longest),
    )


# ---------------------------------------------------------------------------
# GET /progress/daily
# ---------------------------------------------------------------------------

@router.get("/daily", response_model=DailySummaryResponse, summary="Daily intake and activity")
def daily(
    day: Optional[date] = Query(
        default=None,
        description="Day to summarize. Defaults to today (UTC).",
        examples=["2026-02-20"],
    ),
    db: Session = Depends(get_db),
):
    s = daily_summary(db, day)
    return DailySummaryResponse(
        day=str(s.day),
        calories_consumed=s.calories_consumed,
        calorie_target=s.calorie_target,
        protein_consumed=s.protein_consumed,
        protein_target=s.protein_target,
        meal_count=s.meal_count,
        exercise_count=s.exercise_count,
    )


# ---------------------------------------------------------------------------
# GET /progress/weekly-report
# ---------------------------------------------------------------------------

@router.get(
    "/weekly-report",
    response_model=WeeklyScorecardResponse,
    summary="Weekly scorecard",
    responses={200: {"description": "Graded summary of the 7-day window."}},
)
def weekly_report(
    week_start: Optional[date] = Query(
        default=None,
        description=(
            "First day of the 7-day window. "
            "Defaults to the Monday of the current week (UTC)."
        ),
        examples=["2026-02-16"],
    ),
    db: Session = Depends(get_db),
):
    """
    Grade the week across three domains and combine them:

    | Domain | Graded on | Weight |
    |---|---|---|
    | workout   | active days ÷ target days | 40% |
    | nutrition | 100 − \\|100 − calorie adherence\\| | 40% |
    | reminders | completed ÷ scheduled | 20% |

    Letter thresholds: A ≥ 90, B ≥ 75, C ≥ 60, D ≥ 40, else F.
    Computed from raw logs on every request; nothing is stored.
    """
    return _scorecard_to_response(build_weekly_scorecard(db, week_start=week_start))
