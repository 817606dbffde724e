"""
Reminder schemas.

POST /reminders            → ReminderCreate    → ReminderOut
POST /reminders/{id}/logs  → ReminderLogCreate → ReminderLogOut
GET  /reminders/{id}/adherence → ReminderAdherenceOut
"""
from __future__ import annotations

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.reminder import ReminderCategory, ReminderFrequency, ReminderStatus

_WEEKDAYS = {"mon", "tue", "wed", "thu", "fri", "sat", "sun"}
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ReminderCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(min_length=1, max_length=256, examples=["Take Vitamin D"])
    category: ReminderCategory = Field(examples=["supplement"])
    frequency: ReminderFrequency = Field(examples=["daily"])
    time: str = Field(description='"HH:MM", 24-hour.', examples=["08:00"])
    repeat_days: Optional[list[str]] = Field(
        default=None, description="Weekdays for weekly reminders.", examples=[["mon", "thu"]]
    )
    start_date: date
    end_date: Optional[date] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError('time must be "HH:MM" (24-hour)')
        return v

    @field_validator("repeat_days")
    @classmethod
    def check_repeat_days(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        days = [d.strip().lower() for d in v]
        unknown = sorted(set(days) - _WEEKDAYS)
        if unknown:
            raise ValueError(f"unknown weekday(s): {', '.join(unknown)}")
        return list(dict.fromkeys(days))


class ReminderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    frequency: str
    time: str
    repeat_days: Optional[list[str]] = None
    start_date: str
    end_date: Optional[str] = None
    is_active: bool
    is_paused: bool


class ReminderLogCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: ReminderStatus = Field(examples=["completed"])
    day: Optional[date] = Field(default=None, description="Defaults to today (UTC).")
    scheduled_time: Optional[str] = Field(
        default=None, description="Defaults to the reminder's time."
    )


class ReminderLogOut(BaseModel):
    id: int
    reminder_id: int
    day: str
    scheduled_time: str
    status: str
    completed_at: Optional[str] = None


class ReminderAdherenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    completed: int
    missed: int
    skipped: int
    total: int = Field(description="Logs considered (the most recent `days`).")
    adherence_rate: int
