"""
Exercise and meal log schemas.

POST /exercises → ExerciseLogCreate → ExerciseLogCreatedResponse
PATCH /exercises/{id} → ExerciseLogUpdate → ExerciseLogOut
POST /meals     → MealLogCreate     → MealLogOut
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.exercise_log import MuscleGroup
from app.models.meal_log import MealType


class ExerciseLogCreate(BaseModel):
    """A single logged exercise. Validation here is the engine's input contract."""
    model_config = ConfigDict(use_enum_values=True)

    exercise_name: Annotated[str, Field(
        min_length=1,
        max_length=128,
        description="Free-text exercise name. Stripped of surrounding whitespace.",
        examples=["Bench Press"],
    )]
    muscle_group: Optional[MuscleGroup] = Field(default=None, examples=["chest"])
    sets: int = Field(gt=0, le=100, examples=[3])
    reps: int = Field(gt=0, le=1000, examples=[5])
    weight: Optional[float] = Field(
        default=None, ge=0, description="Kilograms. Omit for bodyweight / cardio.", examples=[100]
    )
    duration: Optional[float] = Field(default=None, ge=0, description="Minutes.")
    notes: Optional[str] = Field(default=None, max_length=2000)
    day: Optional[date] = Field(
        default=None,
        description="ISO date of the session. Defaults to today (UTC).",
        examples=["2026-02-20"],
    )

    @field_validator("exercise_name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("exercise_name must not be empty after stripping whitespace")
        return stripped


class ExerciseLogUpdate(BaseModel):
    """Partial edit. Omitted or null fields are left unchanged."""
    model_config = ConfigDict(use_enum_values=True)

    exercise_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    muscle_group: Optional[MuscleGroup] = None
    sets: Optional[int] = Field(default=None, gt=0, le=100)
    reps: Optional[int] = Field(default=None, gt=0, le=1000)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)
    day: Optional[date] = None

    @field_validator("exercise_name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("exercise_name must not be empty after stripping whitespace")
        return stripped


class ExerciseLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: str
    exercise_name: str
    muscle_group: Optional[str] = None
    sets: int
    reps: int
    weight: Optional[float] = None
    duration: Optional[float] = None
    notes: Optional[str] = None


class PRUpdateOut(BaseModel):
    type: str = Field(description='"max_weight" | "max_volume" | "estimated_1rm"')
    value: float
    previous_value: Optional[float] = Field(
        default=None, description="Record that was beaten; null for a first record."
    )


class ExerciseLogCreatedResponse(BaseModel):
    """The stored log plus any personal records it set."""
    log: ExerciseLogOut
    new_prs: list[PRUpdateOut]


class MealLogCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    meal_type: MealType = Field(examples=["lunch"])
    food_name: Annotated[str, Field(min_length=1, max_length=256, examples=["Chicken rice bowl"])]
    quantity: Optional[str] = Field(default=None, max_length=64, examples=["1 bowl"])
    calories: float = Field(ge=0)
    protein: float = Field(ge=0, description="Grams.")
    carbs: float = Field(ge=0, description="Grams.")
    fat: float = Field(ge=0, description="Grams.")
    fiber: Optional[float] = Field(default=None, ge=0)
    day: Optional[date] = Field(default=None, description="Defaults to today (UTC).")

    @field_validator("food_name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("food_name must not be empty after stripping whitespace")
        return stripped


class MealLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: str
    meal_type: str
    food_name: str
    quantity: Optional[str] = None
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: Optional[float] = None


class CalendarDayOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int
    muscle_groups: list[str]
    exercises: list[str]


class MonthSummaryOut(BaseModel):
    """Calendar view of one month of exercise logs, keyed by ISO date."""
    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    by_date: dict[str, CalendarDayOut]
    total_workouts: int = Field(description="Days with at least one log.")
    total_exercises: int
