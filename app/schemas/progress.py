"""
Progress schemas.

GET /progress/streaks        → StreaksResponse
GET /progress/daily          → DailySummaryResponse
GET /progress/weekly-report  → WeeklyScorecardResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class StreakOut(BaseModel):
    current: int = Field(description="Consecutive days ending today or yesterday.")
    longest: int


class StreaksResponse(BaseModel):
    exercise: StreakOut
    meals: StreakOut


class DailySummaryResponse(BaseModel):
    day: str
    calories_consumed: float
    calorie_target: int
    protein_consumed: float
    protein_target: int
    meal_count: int
    exercise_count: int


class WorkoutOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    target_days: int
    total_exercises: int
    total_volume: int
    muscle_group_breakdown: dict[str, int]
    average_exercises_per_day: int
    grade: str


class MacroBreakdownOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    protein: int
    carbs: int
    fat: int


class NutritionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days_logged: int
    average_calories: int
    calorie_target: int
    calorie_adherence: int
    average_protein: int
    protein_target: int
    protein_adherence: int
    macro_breakdown: MacroBreakdownOut
    score: int = Field(description="100 − |100 − calorie_adherence|, floored at 0.")
    grade: str


class CategoryCountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    completed: int
    total: int


class RemindersOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_scheduled: int
    completed: int
    adherence_rate: int
    category_breakdown: dict[str, CategoryCountOut]
    grade: str


class StreakSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exercise_current: int
    exercise_longest: int
    meal_current: int
    meal_longest: int


class WeeklyScorecardResponse(BaseModel):
    """Graded summary of one 7-day window. Recomputed on every request."""
    model_config = ConfigDict(from_attributes=True)

    week_start: str
    week_end: str
    workout: WorkoutOut
    nutrition: NutritionOut
    reminders: RemindersOut
    streaks: StreakSummaryOut
    overall_grade: str
    overall_score: int
    insights: list[str]
