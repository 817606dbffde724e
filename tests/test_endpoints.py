"""
Integration tests for API endpoints using the SQLite test DB.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

MONDAY = "2026-03-16"


def _log_exercise(client, **overrides):
    body = {
        "exercise_name": "Bench Press",
        "muscle_group": "chest",
        "sets": 3,
        "reps": 5,
        "weight": 100,
        "day": "2026-03-16",
    }
    body.update(overrides)
    r = client.post("/exercises", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def _log_meal(client, **overrides):
    body = {
        "meal_type": "lunch",
        "food_name": "Chicken rice bowl",
        "calories": 700,
        "protein": 45,
        "carbs": 80,
        "fat": 15,
        "day": "2026-03-16",
    }
    body.update(overrides)
    r = client.post("/meals", json=body)
    assert r.status_code == 201, r.text
    return r.json()


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestExercises:
    def test_first_log_sets_three_prs(self, client):
        body = _log_exercise(client)
        assert body["log"]["exercise_name"] == "Bench Press"
        assert body["log"]["muscle_group"] == "chest"
        assert {p["type"]: p["value"] for p in body["new_prs"]} == {
            "max_weight": 100.0, "max_volume": 1500.0, "estimated_1rm": 116.7,
        }

    def test_lighter_log_sets_none(self, client):
        _log_exercise(client)
        body = _log_exercise(client, weight=90, day="2026-03-17")
        assert body["new_prs"] == []

    def test_name_is_stripped(self, client):
        body = _log_exercise(client, exercise_name="  Squat  ")
        assert body["log"]["exercise_name"] == "Squat"

    def test_bodyweight_log(self, client):
        body = _log_exercise(client, exercise_name="Pull Up", weight=None, muscle_group="back")
        assert body["new_prs"] == []

    def test_list_by_day(self, client):
        _log_exercise(client)
        _log_exercise(client, exercise_name="Row", day="2026-03-17")
        r = client.get("/exercises", params={"day": "2026-03-17"})
        assert r.status_code == 200
        assert [e["exercise_name"] for e in r.json()] == ["Row"]

    def test_list_recent(self, client):
        _log_exercise(client)
        _log_exercise(client, exercise_name="Row", day="2026-03-17")
        r = client.get("/exercises", params={"limit": 1})
        assert [e["exercise_name"] for e in r.json()] == ["Row"]

    @pytest.mark.parametrize("field,value", [("sets", 0), ("reps", 0), ("reps", -1), ("weight", -5)])
    def test_invalid_values_rejected(self, client, field, value):
        r = client.post("/exercises", json={
            "exercise_name": "Bench Press", "sets": 3, "reps": 5, field: value,
        })
        assert r.status_code == 422

    def test_blank_name_rejected(self, client):
        r = client.post("/exercises", json={"exercise_name": "   ", "sets": 3, "reps": 5})
        assert r.status_code == 422


class TestMeals:
    def test_create_and_list(self, client):
        body = _log_meal(client)
        assert body["meal_type"] == "lunch"
        r = client.get("/meals", params={"day": "2026-03-16"})
        assert len(r.json()) == 1

    def test_invalid_meal_type(self, client):
        r = client.post("/meals", json={
            "meal_type": "brunch", "food_name": "Eggs",
            "calories": 300, "protein": 20, "carbs": 2, "fat": 20,
        })
        assert r.status_code == 422


class TestProfile:
    def test_missing_profile_404(self, client):
        r = client.get("/profile")
        assert r.status_code == 404
        assert r.json()["code"] == "PROFILE_NOT_FOUND"

    def test_create_requires_name(self, client):
        r = client.put("/profile", json={"daily_calorie_target": 2200})
        assert r.status_code == 422
        assert r.json()["code"] == "PROFILE_NAME_REQUIRED"

    def test_create_then_patch(self, client):
        r = client.put("/profile", json={"name": "Alex", "daily_calorie_target": 2200})
        assert r.status_code == 200
        r = client.put("/profile", json={"protein_target": 140})
        body = r.json()
        assert body["name"] == "Alex"
        assert body["daily_calorie_target"] == 2200
        assert body["protein_target"] == 140


class TestReminders:
    def _create(self, client, **overrides):
        body = {
            "title": "Vitamin D",
            "category": "supplement",
            "frequency": "weekly",
            "time": "08:00",
            "repeat_days": ["Mon", "thu"],
            "start_date": MONDAY,
        }
        body.update(overrides)
        return client.post("/reminders", json=body)

    def test_create_and_list(self, client):
        r = self._create(client)
        assert r.status_code == 201
        assert r.json()["repeat_days"] == ["mon", "thu"]
        assert len(client.get("/reminders").json()) == 1

    def test_invalid_time(self, client):
        assert self._create(client, time="25:00").status_code == 422

    def test_invalid_weekday(self, client):
        assert self._create(client, repeat_days=["someday"]).status_code == 422

    def test_log_completion(self, client):
        reminder_id = self._create(client).json()["id"]
        r = client.post(
            f"/reminders/{reminder_id}/logs", json={"status": "completed", "day": MONDAY}
        )
        assert r.status_code == 201
        body = r.json()
        assert body["scheduled_time"] == "08:00"
        assert body["completed_at"] is not None

    def test_log_unknown_reminder(self, client):
        r = client.post("/reminders/9999/logs", json={"status": "missed"})
        assert r.status_code == 404
        assert r.json()["code"] == "REMINDER_NOT_FOUND"


class TestRecords:
    def test_check_is_idempotent(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        r = client.post("/records/check", json={"exercise_log_id": log_id})
        assert r.status_code == 200
        assert r.json() == {"new_prs": []}

    def test_check_unknown_log(self, client):
        r = client.post("/records/check", json={"exercise_log_id": 424242})
        assert r.status_code == 404
        assert r.json()["code"] == "EXERCISE_LOG_NOT_FOUND"

    def test_listings(self, client):
        _log_exercise(client)
        _log_exercise(client, weight=110, day="2026-03-18")

        groups = client.get("/records").json()
        assert groups[0]["exercise_name"] == "bench press"
        assert groups[0]["max_weight"]["value"] == 110.0

        one = client.get("/records/exercise", params={"exercise_name": "BENCH PRESS"}).json()
        assert one["max_weight"]["previous_value"] == 100.0

        recent = client.get("/records/recent", params={"limit": 3}).json()
        assert len(recent) == 3
        assert all(p["achieved_date"] == "2026-03-18" for p in recent)

        assert client.get("/records/count").json() == {"total_prs": 3, "unique_exercises": 1}

        timeline = client.get("/records/timeline", params={"exercise_name": "Bench Press"}).json()
        assert [p["was_new_pr"] for p in timeline] == [True, True]


class TestAchievements:
    def test_progress_lists_four_chains(self, client):
        r = client.get("/achievements")
        assert r.status_code == 200
        assert [c["id"] for c in r.json()] == ["workout_streak", "exercise_count", "pr_count", "variety"]

    def test_check_unlocks_once(self, client):
        _log_exercise(client)
        _log_exercise(client, exercise_name="Squat", muscle_group="legs")
        first = client.post("/achievements/check").json()
        ids = {(b["chain_id"], b["milestone"]) for b in first["newly_unlocked"]}
        assert ids == {("pr_count", 1), ("variety", 2)}
        assert client.post("/achievements/check").json() == {"newly_unlocked": []}

    def test_unlocked_and_notified(self, client):
        _log_exercise(client)
        client.post("/achievements/check")
        unlocked = client.get("/achievements/unlocked").json()
        assert [u["achievement_id"] for u in unlocked] == ["pr_count_1"]
        assert unlocked[0]["notified"] is False
        r = client.post("/achievements/pr_count_1/notified")
        assert r.status_code == 200
        assert r.json()["notified"] is True

    def test_notified_unknown(self, client):
        r = client.post("/achievements/variety_8/notified")
        assert r.status_code == 404
        assert r.json()["code"] == "BADGE_UNLOCK_NOT_FOUND"


class TestProgress:
    def test_streaks(self, client):
        today = datetime.now(tz=timezone.utc).date()
        for offset in range(3):
            _log_exercise(client, day=str(today - timedelta(days=offset)))
        _log_meal(client, day=str(today - timedelta(days=5)))
        body = client.get("/progress/streaks").json()
        assert body["exercise"] == {"current": 3, "longest": 3}
        assert body["meals"] == {"current": 0, "longest": 1}

    def test_daily_summary(self, client):
        _log_meal(client)
        _log_meal(client, meal_type="dinner", calories=900, protein=55)
        _log_exercise(client)
        body = client.get("/progress/daily", params={"day": MONDAY}).json()
        assert body["calories_consumed"] == 1600
        assert body["protein_consumed"] == 100
        assert body["meal_count"] == 2
        assert body["exercise_count"] == 1
        assert body["calorie_target"] == 2000

    def test_weekly_report_shape(self, client):
        _log_exercise(client)
        _log_meal(client, calories=2000, protein=100)
        r = client.get("/progress/weekly-report", params={"week_start": MONDAY})
        assert r.status_code == 200
        body = r.json()
        assert body["week_start"] == MONDAY
        assert body["week_end"] == "2026-03-22"
        assert body["workout"]["total_days"] == 1
        assert body["workout"]["grade"] == "F"
        assert body["nutrition"]["calorie_adherence"] == 100
        assert body["nutrition"]["grade"] == "A"
        assert body["reminders"]["adherence_rate"] == 100
        assert body["overall_grade"] in {"A", "B", "C", "D", "F"}
        assert isinstance(body["insights"], list)

    def test_weekly_report_is_stable(self, client):
        _log_exercise(client)
        first = client.get("/progress/weekly-report", params={"week_start": MONDAY}).json()
        second = client.get("/progress/weekly-report", params={"week_start": MONDAY}).json()
        assert first == second

    def test_weekly_report_default_window(self, client):
        body = client.get("/progress/weekly-report").json()
        start = date.fromisoformat(body["week_start"])
        assert start.weekday() == 0


class TestLogLifecycle:
    def test_patch_exercise(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        r = client.patch(f"/exercises/{log_id}", json={"reps": 8, "notes": "felt easy", "weight": None})
        assert r.status_code == 200
        body = r.json()
        assert body["reps"] == 8
        assert body["notes"] == "felt easy"
        assert body["weight"] == 100.0
        assert body["sets"] == 3

    def test_patch_keeps_records(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        client.patch(f"/exercises/{log_id}", json={"weight": 60})
        records = client.get("/records/exercise", params={"exercise_name": "Bench Press"}).json()
        assert records["max_weight"]["value"] == 100.0

    def test_patch_rejects_invalid_values(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        assert client.patch(f"/exercises/{log_id}", json={"sets": 0}).status_code == 422
        assert client.patch(f"/exercises/{log_id}", json={"exercise_name": "  "}).status_code == 422

    def test_patch_unknown_log(self, client):
        r = client.patch("/exercises/9999", json={"reps": 3})
        assert r.status_code == 404
        assert r.json()["code"] == "EXERCISE_LOG_NOT_FOUND"

    def test_delete_exercise(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        r = client.delete(f"/exercises/{log_id}")
        assert r.status_code == 204
        assert client.get("/exercises", params={"day": "2026-03-16"}).json() == []
        assert client.delete(f"/exercises/{log_id}").status_code == 404

    def test_delete_keeps_records_and_unlinks_them(self, client):
        log_id = _log_exercise(client)["log"]["id"]
        client.delete(f"/exercises/{log_id}")
        recent = client.get("/records/recent").json()
        assert len(recent) == 3
        assert all(p["exercise_log_id"] is None for p in recent)

    def test_unlocks_survive_log_deletion(self, client):
        ids = [
            _log_exercise(client, exercise_name=f"Drill {i}", weight=None, day="2025-01-06")["log"]["id"]
            for i in range(10)
        ]
        unlocked = client.post("/achievements/check").json()["newly_unlocked"]
        assert {"chain_id": "exercise_count", "milestone": 10} in unlocked

        for log_id in ids:
            assert client.delete(f"/exercises/{log_id}").status_code == 204

        progress = {c["id"]: c for c in client.get("/achievements").json()}
        assert progress["exercise_count"]["current_value"] == 0
        assert client.post("/achievements/check").json() == {"newly_unlocked": []}
        ledger = [u["achievement_id"] for u in client.get("/achievements/unlocked").json()]
        assert "exercise_count_10" in ledger

    def test_delete_meal(self, client):
        meal_id = _log_meal(client)["id"]
        assert client.delete(f"/meals/{meal_id}").status_code == 204
        assert client.get("/meals", params={"day": "2026-03-16"}).json() == []


class TestCalendarSummaries:
    def test_week_summary(self, client):
        _log_exercise(client)
        _log_exercise(client, exercise_name="Row")
        _log_exercise(client, day="2026-03-18")
        _log_exercise(client, day="2026-03-25")
        r = client.get("/exercises/week-summary", params={"start": "2026-03-16", "end": "2026-03-22"})
        assert r.status_code == 200
        assert r.json() == {"2026-03-16": 2, "2026-03-18": 1}

    def test_month_summary(self, client):
        _log_exercise(client)
        _log_exercise(client, exercise_name="Row", muscle_group="back")
        _log_exercise(client, exercise_name="Fly")
        _log_exercise(client, day="2026-03-31", muscle_group=None)
        _log_exercise(client, day="2026-04-01")
        body = client.get("/exercises/month-summary", params={"year": 2026, "month": 3}).json()
        assert body["total_workouts"] == 2
        assert body["total_exercises"] == 4
        assert body["by_date"]["2026-03-16"] == {
            "count": 3,
            "muscle_groups": ["chest", "back"],
            "exercises": ["Bench Press", "Row", "Fly"],
        }
        assert body["by_date"]["2026-03-31"]["muscle_groups"] == []

    def test_december_rolls_into_next_year(self, client):
        _log_exercise(client, day="2026-12-31")
        _log_exercise(client, day="2027-01-01")
        body = client.get("/exercises/month-summary", params={"year": 2026, "month": 12}).json()
        assert list(body["by_date"]) == ["2026-12-31"]

    def test_invalid_month(self, client):
        r = client.get("/exercises/month-summary", params={"year": 2026, "month": 13})
        assert r.status_code == 422


class TestReminderControls:
    def _create(self, client):
        r = client.post("/reminders", json={
            "title": "Fish oil", "category": "supplement", "frequency": "daily",
            "time": "09:00", "start_date": MONDAY,
        })
        return r.json()["id"]

    def test_toggle_pause(self, client):
        reminder_id = self._create(client)
        first = client.post(f"/reminders/{reminder_id}/toggle-pause").json()
        assert first["is_paused"] is True
        second = client.post(f"/reminders/{reminder_id}/toggle-pause").json()
        assert second["is_paused"] is False

    def test_toggle_unknown(self, client):
        assert client.post("/reminders/777/toggle-pause").status_code == 404

    def test_adherence(self, client):
        reminder_id = self._create(client)
        for i, status in enumerate(["completed", "completed", "missed", "skipped", "completed"]):
            day = str(date(2026, 3, 16) + timedelta(days=i))
            client.post(f"/reminders/{reminder_id}/logs", json={"status": status, "day": day})
        body = client.get(f"/reminders/{reminder_id}/adherence").json()
        assert body == {"completed": 3, "missed": 1, "skipped": 1, "total": 5, "adherence_rate": 60}

        # Only the two most recent logs: completed (20th) and skipped (19th).
        recent = client.get(f"/reminders/{reminder_id}/adherence", params={"days": 2}).json()
        assert recent["total"] == 2
        assert recent["adherence_rate"] == 50

    def test_adherence_without_logs(self, client):
        reminder_id = self._create(client)
        body = client.get(f"/reminders/{reminder_id}/adherence").json()
        assert body["total"] == 0
        assert body["adherence_rate"] == 0
