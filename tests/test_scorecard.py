"""
Tests for the weekly scorecard.

Covered scenarios:
  A) grade boundaries (90 → A, 89 → B, 0 → F)
  B) over- and under-eating by the same margin score the same
  C) window resolution (explicit start, Monday of today's week)
  D) scheduled-reminder estimate per frequency
  E) empty week
  F) full DB-backed build is deterministic for fixed logs / window / today

Pure builders are exercised with SimpleNamespace rows; the DB entry point
with real models.
"""
from __future__ import annotations

import pytest
from datetime import date, timedelta
from types import SimpleNamespace

from app.models.exercise_log import ExerciseLog
from app.models.meal_log import MealLog
from app.models.reminder import Reminder, ReminderLog
from app.models.user_profile import UserProfile
from app.services.profile import NutritionTargets
from app.services.scorecard import (
    build_insights,
    build_scorecard,
    build_weekly_scorecard,
    grade_anchor,
    grade_for,
    nutrition_score,
    overall_score,
    resolve_window,
    scheduled_in_window,
    summarize_nutrition,
    summarize_reminders,
    summarize_workouts,
)
from app.services.streak import StreakResult

MONDAY = date(2026, 3, 16)
SUNDAY = date(2026, 3, 22)
TARGETS = NutritionTargets(calories=2000, protein=100)


def _ex(day, sets=3, reps=10, weight=50.0, muscle_group="chest"):
    return SimpleNamespace(day=day, sets=sets, reps=reps, weight=weight, muscle_group=muscle_group)


def _meal(day, calories=2000, protein=100, carbs=250, fat=70):
    return SimpleNamespace(day=day, calories=calories, protein=protein, carbs=carbs, fat=fat)


def _reminder(id, frequency, category="supplement", repeat_days=None, start_date=MONDAY):
    return SimpleNamespace(
        id=id, frequency=frequency, category=category,
        repeat_days=repeat_days, start_date=start_date,
    )


def _rlog(reminder_id, day, status="completed"):
    return SimpleNamespace(reminder_id=reminder_id, day=day, status=status)


# ---------------------------------------------------------------------------
# Grades
# ---------------------------------------------------------------------------

class TestGrades:
    @pytest.mark.parametrize("percent,letter", [
        (100, "A"), (90, "A"), (89, "B"), (75, "B"), (74.9, "C"),
        (60, "C"), (59, "D"), (40, "D"), (39, "F"), (0, "F"),
    ])
    def test_grade_for(self, percent, letter):
        assert grade_for(percent) == letter

    def test_anchors(self):
        assert [grade_anchor(g) for g in "ABCDF"] == [100, 80, 65, 50, 30]

    def test_overall_weights(self):
        # 100*0.4 + 30*0.4 + 80*0.2 = 68
        assert overall_score("A", "F", "B") == 68

    def test_overall_all_a(self):
        assert overall_score("A", "A", "A") == 100


class TestNutritionScore:
    def test_symmetric_around_target(self):
        assert nutrition_score(120) == nutrition_score(80) == 80

    def test_floored_at_zero(self):
        assert nutrition_score(250) == 0


# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------

class TestResolveWindow:
    def test_explicit_start(self):
        assert resolve_window(date(2026, 3, 18)) == (date(2026, 3, 18), date(2026, 3, 24))

    def test_defaults_to_monday_of_today(self):
        assert resolve_window(None, today=date(2026, 3, 19)) == (MONDAY, SUNDAY)

    def test_sunday_belongs_to_preceding_monday(self):
        assert resolve_window(None, today=SUNDAY) == (MONDAY, SUNDAY)


# ---------------------------------------------------------------------------
# Per-domain builders
# ---------------------------------------------------------------------------

class TestWorkouts:
    def test_summary(self):
        logs = [
            _ex(MONDAY), _ex(MONDAY, muscle_group="back"),
            _ex(MONDAY + timedelta(days=2), weight=None, muscle_group=None),
        ]
        s = summarize_workouts(logs, target_days=5)
        assert s.total_days == 2
        assert s.total_exercises == 3
        assert s.total_volume == 3000
        assert s.muscle_group_breakdown == {"back": 1, "chest": 1}
        assert s.average_exercises_per_day == 2  # 1.5 rounds half up
        assert s.grade == "D"  # 40%

    def test_empty(self):
        s = summarize_workouts([], target_days=5)
        assert s.total_days == 0
        assert s.average_exercises_per_day == 0
        assert s.grade == "F"


class TestNutrition:
    def test_averages_over_logged_days_only(self):
        logs = [
            _meal(MONDAY, calories=1000, protein=50),
            _meal(MONDAY, calories=1400, protein=60),
            _meal(MONDAY + timedelta(days=1), calories=1600, protein=90),
        ]
        s = summarize_nutrition(logs, TARGETS)
        assert s.total_days_logged == 2
        assert s.average_calories == 2000
        assert s.calorie_adherence == 100
        assert s.average_protein == 100
        assert s.score == 100
        assert s.grade == "A"

    def test_over_and_under_eating_grade_the_same(self):
        over = summarize_nutrition([_meal(MONDAY, calories=2400)], TARGETS)
        under = summarize_nutrition([_meal(MONDAY, calories=1600)], TARGETS)
        assert over.calorie_adherence == 120
        assert under.calorie_adherence == 80
        assert over.score == under.score == 80
        assert over.grade == under.grade == "B"

    def test_no_meals(self):
        s = summarize_nutrition([], TARGETS)
        assert s.total_days_logged == 0
        assert s.average_calories == 0
        assert s.calorie_adherence == 0
        assert s.score == 0
        assert s.grade == "F"


class TestReminders:
    def test_scheduled_per_frequency(self):
        assert scheduled_in_window(_reminder(1, "daily"), MONDAY, SUNDAY) == 7
        assert scheduled_in_window(
            _reminder(2, "weekly", repeat_days=["mon", "thu"]), MONDAY, SUNDAY
        ) == 2
        assert scheduled_in_window(_reminder(3, "weekly"), MONDAY, SUNDAY) == 0
        assert scheduled_in_window(_reminder(4, "once"), MONDAY, SUNDAY) == 1
        assert scheduled_in_window(
            _reminder(5, "once", start_date=MONDAY - timedelta(days=1)), MONDAY, SUNDAY
        ) == 0
        assert scheduled_in_window(_reminder(6, "monthly"), MONDAY, SUNDAY) == 0

    def test_adherence_and_breakdown(self):
        reminders = [
            _reminder(1, "daily", category="medicine"),
            _reminder(2, "weekly", category="water", repeat_days=["mon", "wed", "fri"]),
        ]
        logs = (
            [_rlog(1, MONDAY + timedelta(days=i)) for i in range(6)]
            + [_rlog(1, SUNDAY, status="missed"), _rlog(2, MONDAY), _rlog(2, MONDAY, status="skipped")]
        )
        s = summarize_reminders(reminders, logs, MONDAY, SUNDAY)
        assert s.total_scheduled == 10
        assert s.completed == 7
        assert s.adherence_rate == 70
        assert s.grade == "C"
        assert s.category_breakdown["medicine"].completed == 6
        assert s.category_breakdown["medicine"].total == 7
        assert s.category_breakdown["water"].total == 3

    def test_category_totals_sum_to_overall_total(self):
        # Weekly and once reminders count toward their category, not only daily ones.
        reminders = [
            _reminder(1, "weekly", category="water", repeat_days=["tue", "thu", "sat"]),
            _reminder(2, "once", category="medicine", start_date=MONDAY + timedelta(days=2)),
            _reminder(3, "once", category="medicine", start_date=SUNDAY + timedelta(days=1)),
            _reminder(4, "daily", category="supplement"),
        ]
        s = summarize_reminders(reminders, [], MONDAY, SUNDAY)
        assert s.category_breakdown["water"].total == 3
        assert s.category_breakdown["medicine"].total == 1
        assert s.category_breakdown["supplement"].total == 7
        assert sum(c.total for c in s.category_breakdown.values()) == s.total_scheduled == 11

    def test_nothing_scheduled_is_full_adherence(self):
        s = summarize_reminders([], [], MONDAY, SUNDAY)
        assert s.total_scheduled == 0
        assert s.adherence_rate == 100
        assert s.grade == "A"

    def test_completion_of_inactive_reminder_uses_category_map(self):
        s = summarize_reminders([], [_rlog(9, MONDAY)], MONDAY, SUNDAY, categories={9: "meal"})
        assert s.category_breakdown["meal"].completed == 1
        assert s.category_breakdown["meal"].total == 0


class TestInsights:
    def _card(self, **overrides):
        card = build_scorecard(
            MONDAY, SUNDAY, [], [], [], [], TARGETS, 5,
            StreakResult(0, 0), StreakResult(0, 0),
        )
        for k, v in overrides.items():
            setattr(card, k, v)
        return card

    def test_empty_week_messages(self):
        card = self._card()
        assert card.insights == [
            "Try to add 5 more workout days next week.",
            "Consider adding more protein-rich foods to your meals.",
            "Outstanding reminder adherence - consistency is key!",
        ]

    def test_streak_callout(self):
        card = self._card()
        card.streaks.exercise_current = 9
        card.workout.total_days = 4
        card.nutrition.protein_adherence = 95
        insights = build_insights(card.workout, card.nutrition, card.reminders, card.streaks)
        assert "Almost hit your workout target - keep pushing!" in insights
        assert "Excellent protein intake - your muscles thank you!" in insights
        assert "Amazing 9-day workout streak!" in insights

    def test_mid_protein_has_no_protein_message(self):
        card = self._card()
        card.nutrition.protein_adherence = 80
        card.workout.total_days = 5
        insights = build_insights(card.workout, card.nutrition, card.reminders, card.streaks)
        assert insights[0] == "Great job hitting your workout target this week!"
        assert not any("protein" in i for i in insights)


class TestBuildScorecard:
    def test_logs_outside_window_are_ignored(self):
        card = build_scorecard(
            MONDAY, SUNDAY,
            [_ex(MONDAY - timedelta(days=1)), _ex(SUNDAY + timedelta(days=1))],
            [_meal(SUNDAY + timedelta(days=1))],
            [], [], TARGETS, 5, StreakResult(0, 0), StreakResult(0, 0),
        )
        assert card.workout.total_exercises == 0
        assert card.nutrition.total_days_logged == 0

    def test_empty_week_grades(self):
        card = build_scorecard(
            MONDAY, SUNDAY, [], [], [], [], TARGETS, 5, StreakResult(0, 0), StreakResult(0, 0),
        )
        assert (card.workout.grade, card.nutrition.grade, card.reminders.grade) == ("F", "F", "A")
        # 30*0.4 + 30*0.4 + 100*0.2 = 44
        assert card.overall_score == 44
        assert card.overall_grade == "D"


# ---------------------------------------------------------------------------
# DB entry point
# ---------------------------------------------------------------------------

class TestWeeklyScorecardFromDB:
    def _seed(self, db):
        db.add(UserProfile(name="Sam", daily_calorie_target=2500, protein_target=150))
        for i in range(5):
            db.add(ExerciseLog(
                day=MONDAY + timedelta(days=i), exercise_name="Squat",
                muscle_group="legs", sets=5, reps=5, weight=100,
            ))
            db.add(MealLog(
                day=MONDAY + timedelta(days=i), meal_type="dinner", food_name="Steak",
                calories=2500, protein=150, carbs=200, fat=90,
            ))
        db.add(ExerciseLog(day=MONDAY - timedelta(days=7), exercise_name="Row", sets=1, reps=1))
        reminder = Reminder(
            title="Creatine", category="supplement", frequency="daily",
            time="08:00", start_date=MONDAY,
        )
        db.add(reminder)
        db.flush()
        for i in range(7):
            db.add(ReminderLog(
                reminder_id=reminder.id, day=MONDAY + timedelta(days=i),
                scheduled_time="08:00", status="completed",
            ))
        db.commit()

    def test_full_week(self, db):
        self._seed(db)
        card = build_weekly_scorecard(db, week_start=MONDAY, today=MONDAY + timedelta(days=4))
        assert card.week_start == MONDAY
        assert card.week_end == SUNDAY
        assert card.workout.total_days == 5
        assert card.workout.total_exercises == 5
        assert card.workout.total_volume == 12500
        assert card.workout.muscle_group_breakdown == {"legs": 5}
        assert card.nutrition.calorie_target == 2500
        assert card.nutrition.calorie_adherence == 100
        assert card.nutrition.protein_adherence == 100
        assert card.reminders.total_scheduled == 7
        assert card.reminders.adherence_rate == 100
        assert card.reminders.category_breakdown["supplement"].completed == 7
        assert card.streaks.exercise_current == 5
        assert card.streaks.meal_longest == 5
        assert card.overall_grade == "A"
        assert card.overall_score == 100

    def test_deterministic(self, db):
        self._seed(db)
        today = MONDAY + timedelta(days=6)
        first = build_weekly_scorecard(db, week_start=MONDAY, today=today)
        second = build_weekly_scorecard(db, week_start=MONDAY, today=today)
        assert first == second

    def test_defaults_to_current_week(self, db):
        card = build_weekly_scorecard(db, today=date(2026, 3, 19))
        assert (card.week_start, card.week_end) == (MONDAY, SUNDAY)

    def test_falls_back_to_default_targets(self, db):
        card = build_weekly_scorecard(db, week_start=MONDAY, today=SUNDAY)
        assert card.nutrition.calorie_target == 2000
        assert card.nutrition.protein_target == 100
