from .exercise_log import ExerciseLog
from .meal_log import MealLog
from .reminder import Reminder, ReminderLog
from .user_profile import UserProfile
from .personal_record import PersonalRecord
from .badge_unlock import BadgeUnlock

__all__ = [
    "ExerciseLog",
    "MealLog",
    "Reminder",
    "ReminderLog",
    "UserProfile",
    "PersonalRecord",
    "BadgeUnlock",
]
