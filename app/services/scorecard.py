"""
Weekly scorecard — graded 7-day summary across workouts, nutrition and
reminders.

Window
------
  explicit week_start  → [week_start, week_start + 6]
  otherwise            → Monday–Sunday week containing today (UTC)

Grading
-------
One table maps a 0–100 percentage to a letter and a letter to the numeric
anchor used for the overall score:

  letter  min %  anchor
  A       90     100
  B       75      80
  C       60      65
  D       40      50
  F        0      30

  workout    % of target workout days met
  nutrition  100 − |100 − calorie adherence|  (over- and under-eating cost the same)
  reminders  adherence rate

  overall = round(workout × 0.4 + nutrition × 0.4 + reminders × 0.2)  (anchors)

Nothing is cached or persisted: every call recomputes from raw logs, so the
same logs, window and `today` always give the same scorecard.

Scheduled-reminder estimate
---------------------------
daily → 7, weekly → number of repeat days, once → 1 if its start date is
inside the window, monthly → 0. Daily reminders count 7 even when created
mid-week, which inflates the denominator for new reminders.

Public API
----------
resolve_window(week_start, today)        -> (date, date)
grade_for(percent) / grade_anchor(letter)
build_scorecard(...)                     -> WeeklyScorecard   (pure)
build_weekly_scorecard(db, week_start, today) -> WeeklyScorecard
"""
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.numbers import round_int
from app.models.exercise_log import ExerciseLog
from app.models.meal_log import MealLog
from app.models.reminder import Reminder, ReminderFrequency, ReminderLog, ReminderStatus
from app.services.profile import NutritionTargets, get_targets
from app.services.reminders import list_active_reminders
from app.services.streak import StreakResult, exercise_streak, meal_streak


# ---------------------------------------------------------------------------
# Grade table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GradeBand:
    letter: str
    min_percent: float
    anchor: int


GRADE_BANDS: tuple[GradeBand, ...] = (
    GradeBand("A", 90, 100),
    GradeBand("B", 75, 80),
    GradeBand("C", 60, 65),
    GradeBand("D", 40, 50),
    GradeBand("F", 0, 30),
)

_ANCHORS = {band.letter: band.anchor for band in GRADE_BANDS}

WORKOUT_WEIGHT   = 0.4
NUTRITION_WEIGHT = 0.4
REMINDER_WEIGHT  = 0.2

STREAK_CALLOUT_DAYS      = 7
PROTEIN_EXCELLENT        = 90
PROTEIN_LOW              = 70
REMINDER_CALLOUT_PERCENT = 90


def grade_for(percent: float) -> str:
    for band in GRADE_BANDS:
        if percent >= band.min_percent:
            return band.letter
    return GRADE_BANDS[-1].letter


def grade_anchor(letter: str) -> int:
    return _ANCHORS[letter]


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class WorkoutSummary:
    total_days: int
    target_days: int
    total_exercises: int
    total_volume: int
    muscle_group_breakdown: dict[str, int]
    average_exercises_per_day: int
    grade: str


@dataclass
class MacroBreakdown:
    protein: int
    carbs: int
    fat: int


@dataclass
class NutritionSummary:
    total_days_logged: int
    average_calories: int
    calorie_target: int
    calorie_adherence: int
    average_protein: int
    protein_target: int
    protein_adherence: int
    macro_breakdown: MacroBreakdown
    score: int
    grade: str


@dataclass
class CategoryCount:
    completed: int = 0
    total: int = 0


@dataclass
class ReminderSummary:
    total_scheduled: int
    completed: int
    adherence_rate: int
    category_breakdown: dict[str, CategoryCount]
    grade: str


@dataclass
class StreakSummary:
    exercise_current: int
    exercise_longest: int
    meal_current: int
    meal_longest: int


@dataclass
class WeeklyScorecard:
    week_start: date
    week_end: date
    workout: WorkoutSummary
    nutrition: NutritionSummary
    reminders: ReminderSummary
    streaks: StreakSummary
    overall_grade: str
    overall_score: int
    insights: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def resolve_window(
    week_start: Optional[date] = None,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Inclusive 7-day window: explicit start, or the Monday–Sunday week of today."""
    if week_start is not None:
        return week_start, week_start + timedelta(days=6)
    anchor = today or _today()
    monday = anchor - timedelta(days=anchor.weekday())
    return monday, monday + timedelta(days=6)


def _in_window(rows: Iterable, start: date, end: date) -> list:
    return [r for r in rows if start <= r.day <= end]


# ---------------------------------------------------------------------------
# Per-domain builders (pure)
# ---------------------------------------------------------------------------

def summarize_workouts(logs: Sequence, target_days: int) -> WorkoutSummary:
    active_days = len({log.day for log in logs})
    total_exercises = len(logs)
    total_volume = sum(
        log.sets * log.reps * log.weight for log in logs if log.weight
    )
    muscles = Counter(_ev(log.muscle_group) for log in logs if log.muscle_group)

    percent = active_days / target_days * 100 if target_days > 0 else 100
    return WorkoutSummary(
        total_days=active_days,
        target_days=target_days,
        total_exercises=total_exercises,
        total_volume=round_int(total_volume),
        muscle_group_breakdown=dict(sorted(muscles.items())),
        average_exercises_per_day=(
            round_int(total_exercises / active_days) if active_days else 0
        ),
        grade=grade_for(percent),
    )


def _adherence(average: int, target: int) -> int:
    return round_int(average / target * 100) if target > 0 else 0


def nutrition_score(calorie_adherence: float) -> float:
    """Distance from 100% adherence, penalized the same in both directions."""
    return max(0, 100 - abs(100 - calorie_adherence))


def summarize_nutrition(logs: Sequence, targets: NutritionTargets) -> NutritionSummary:
    # Only days with at least one meal count toward the averages.
    per_day: dict[date, list[float]] = defaultdict(lambda: [0.0, 0.0, 0.0, 0.0])
    for log in logs:
        totals = per_day[log.day]
        totals[0] += log.calories
        totals[1] += log.protein
        totals[2] += log.carbs
        totals[3] += log.fat

    days = len(per_day)

    def _avg(i: int) -> int:
        return round_int(sum(t[i] for t in per_day.values()) / days) if days else 0

    avg_calories, avg_protein, avg_carbs, avg_fat = _avg(0), _avg(1), _avg(2), _avg(3)
    calorie_adherence = _adherence(avg_calories, targets.calories)
    protein_adherence = _adherence(avg_protein, targets.protein)
    score = round_int(nutrition_score(calorie_adherence))

    return NutritionSummary(
        total_days_logged=days,
        average_calories=avg_calories,
        calorie_target=targets.calories,
        calorie_adherence=calorie_adherence,
        average_protein=avg_protein,
        protein_target=targets.protein,
        protein_adherence=protein_adherence,
        macro_breakdown=MacroBreakdown(protein=avg_protein, carbs=avg_carbs, fat=avg_fat),
        score=score,
        grade=grade_for(score),
    )


def scheduled_in_window(reminder, start: date, end: date) -> int:
    """Approximate occurrences of one reminder inside a 7-day window."""
    frequency = _ev(reminder.frequency)
    if frequency == ReminderFrequency.daily.value:
        return 7
    if frequency == ReminderFrequency.weekly.value:
        return len(reminder.repeat_days or [])
    if frequency == ReminderFrequency.once.value:
        return 1 if start <= reminder.start_date <= end else 0
    return 0


def summarize_reminders(
    reminders: Sequence,
    logs: Sequence,
    start: date,
    end: date,
    categories: Optional[dict[int, str]] = None,
) -> ReminderSummary:
    """
    `reminders` are the active definitions; `logs` the reminder logs inside the
    window. `categories` maps reminder id → category for every known reminder
    (active or not) so completions of retired reminders still land in a bucket.
    """
    categories = dict(categories or {})
    breakdown: dict[str, CategoryCount] = {}
    total_scheduled = 0

    for reminder in reminders:
        category = _ev(reminder.category)
        categories.setdefault(reminder.id, category)
        expected = scheduled_in_window(reminder, start, end)
        total_scheduled += expected
        # Same estimate as the overall total, for every frequency.
        breakdown.setdefault(category, CategoryCount()).total += expected

    completed = 0
    for log in logs:
        if _ev(log.status) != ReminderStatus.completed.value:
            continue
        completed += 1
        category = categories.get(log.reminder_id)
        if category is not None:
            breakdown.setdefault(category, CategoryCount()).completed += 1

    adherence = round_int(completed / total_scheduled * 100) if total_scheduled > 0 else 100
    return ReminderSummary(
        total_scheduled=total_scheduled,
        completed=completed,
        adherence_rate=adherence,
        category_breakdown=dict(sorted(breakdown.items())),
        grade=grade_for(adherence),
    )


def overall_score(workout_grade: str, nutrition_grade: str, reminder_grade: str) -> int:
    return round_int(
        grade_anchor(workout_grade) * WORKOUT_WEIGHT
        + grade_anchor(nutrition_grade) * NUTRITION_WEIGHT
        + grade_anchor(reminder_grade) * REMINDER_WEIGHT
    )


def build_insights(
    workout: WorkoutSummary,
    nutrition: NutritionSummary,
    reminders: ReminderSummary,
    streaks: StreakSummary,
) -> list[str]:
    """Independent rules, evaluated in a fixed order; several may fire."""
    insights: list[str] = []

    if workout.total_days >= workout.target_days:
        insights.append("Great job hitting your workout target this week!")
    elif workout.total_days >= workout.target_days - 1:
        insights.append("Almost hit your workout target - keep pushing!")
    else:
        missing = workout.target_days - workout.total_days
        insights.append(f"Try to add {missing} more workout days next week.")

    if nutrition.protein_adherence >= PROTEIN_EXCELLENT:
        insights.append("Excellent protein intake - your muscles thank you!")
    elif nutrition.protein_adherence < PROTEIN_LOW:
        insights.append("Consider adding more protein-rich foods to your meals.")

    if streaks.exercise_current >= STREAK_CALLOUT_DAYS:
        insights.append(f"Amazing {streaks.exercise_current}-day workout streak!")

    if reminders.adherence_rate >= REMINDER_CALLOUT_PERCENT:
        insights.append("Outstanding reminder adherence - consistency is key!")

    return insights


def build_scorecard(
    start: date,
    end: date,
    exercise_logs: Sequence,
    meal_logs: Sequence,
    reminders: Sequence,
    reminder_logs: Sequence,
    targets: NutritionTargets,
    target_days: int,
    exercise: StreakResult,
    meals: StreakResult,
    categories: Optional[dict[int, str]] = None,
) -> WeeklyScorecard:
    """Assemble a scorecard from in-memory records. Logs outside the window are ignored."""
    workout = summarize_workouts(_in_window(exercise_logs, start, end), target_days)
    nutrition = summarize_nutrition(_in_window(meal_logs, start, end), targets)
    reminder_summary = summarize_reminders(
        reminders, _in_window(reminder_logs, start, end), start, end, categories
    )
    streaks = StreakSummary(
        exercise_current=exercise.current,
        exercise_longest=exercise.longest,
        meal_current=meals.current,
        meal_longest=meals.longest,
    )
    score = overall_score(workout.grade, nutrition.grade, reminder_summary.grade)

    return WeeklyScorecard(
        week_start=start,
        week_end=end,
        workout=workout,
        nutrition=nutrition,
        reminders=reminder_summary,
        streaks=streaks,
        overall_grade=grade_for(score),
        overall_score=score,
        insights=build_insights(workout, nutrition, reminder_summary, streaks),
    )


# ---------------------------------------------------------------------------
# Public — main entry point
# ---------------------------------------------------------------------------

def build_weekly_scorecard(
    db: Session,
    week_start: Optional[date] = None,
    today: Optional[date] = None,
) -> WeeklyScorecard:
    """Fetch the window's records and build the scorecard. Read-only."""
    today = today or _today()
    start, end = resolve_window(week_start, today)

    exercise_logs = (
        db.query(ExerciseLog)
        .filter(ExerciseLog.day >= start, ExerciseLog.day <= end)
        .order_by(ExerciseLog.day, ExerciseLog.id)
        .all()
    )
    meal_logs = (
        db.query(MealLog)
        .filter(MealLog.day >= start, MealLog.day <= end)
        .order_by(MealLog.day, MealLog.id)
        .all()
    )
    reminder_logs = (
        db.query(ReminderLog)
        .filter(ReminderLog.day >= start, ReminderLog.day <= end)
        .order_by(ReminderLog.day, ReminderLog.id)
        .all()
    )
    categories = {r.id: _ev(r.category) for r in db.query(Reminder.id, Reminder.category).all()}

    return build_scorecard(
        start=start,
        end=end,
        exercise_logs=exercise_logs,
        meal_logs=meal_logs,
        reminders=list_active_reminders(db),
        reminder_logs=reminder_logs,
        targets=get_targets(db),
        target_days=settings.WORKOUT_TARGET_DAYS,
        exercise=exercise_streak(db, today),
        meals=meal_streak(db, today),
        categories=categories,
    )
