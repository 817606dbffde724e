"""
Meal log router.

POST   /meals            — log a meal
GET    /meals            — meals of one day, or the most recent ones
DELETE /meals/{log_id}   — remove a meal
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.meal_log import MealLog
from app.schemas.common import ErrorResponse
from app.schemas.logs import MealLogCreate, MealLogOut
from app.services.logbook import create_meal_log, delete_meal_log, list_meal_logs

router = APIRouter(prefix="/meals", tags=["meals"])


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def _meal_to_response(log: MealLog) -> MealLogOut:
    return MealLogOut(
        id=log.id,
        day=str(log.day),
        meal_type=_ev(log.meal_type),
        food_name=log.food_name,
        quantity=log.quantity,
        calories=log.calories,
        protein=log.protein,
        carbs=log.carbs,
        fat=log.fat,
        fiber=log.fiber,
    )


@router.post(
    "",
    response_model=MealLogOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log a meal",
)
def log_meal(payload: MealLogCreate, db: Session = Depends(get_db)):
    return _meal_to_response(create_meal_log(db, payload.model_dump()))


@router.get(
    "",
    response_model=list[MealLogOut],
    summary="List meal logs",
)
def list_meals(
    day: Optional[date] = Query(default=None, examples=["2026-02-20"]),
    limit: int = Query(default=20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return [_meal_to_response(log) for log in list_meal_logs(db, day=day, limit=limit)]


@router.delete(
    "/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a meal log",
    responses={404: {"model": ErrorResponse, "description": "Unknown meal log."}},
)
def remove_meal(log_id: int, db: Session = Depends(get_db)):
    delete_meal_log(db, log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
