"""
Reminder definitions and their completion log.

Only the fields the weekly scorecard needs to estimate "scheduled" counts
(frequency, repeat_days, start_date, category) carry meaning for analytics;
delivery time and pause state belong to the reminder scheduler.
"""
from datetime import datetime, date
from sqlalchemy import (
    Integer, String, Boolean, DateTime, Date, Enum, JSON, ForeignKey, func,
)
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class ReminderCategory(str, enum.Enum):
    medicine = "medicine"
    supplement = "supplement"
    workout = "workout"
    meal = "meal"
    water = "water"
    custom = "custom"


class ReminderFrequency(str, enum.Enum):
    once = "once"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class ReminderStatus(str, enum.Enum):
    completed = "completed"
    missed = "missed"
    skipped = "skipped"
    snoozed = "snoozed"


class Reminder(Base):
    __tablename__ = "reminders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    category: Mapped[str] = mapped_column(
        Enum(ReminderCategory, name="reminder_category_enum"), nullable=False
    )
    frequency: Mapped[str] = mapped_column(
        Enum(ReminderFrequency, name="reminder_frequency_enum"), nullable=False
    )
    time: Mapped[str] = mapped_column(String(5), nullable=False, comment='"HH:MM", 24h')
    repeat_days: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, comment='Weekday abbreviations for weekly reminders, e.g. ["mon", "thu"]'
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_paused: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ReminderLog(Base):
    __tablename__ = "reminder_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    reminder_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reminders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    scheduled_time: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[str] = mapped_column(
        Enum(ReminderStatus, name="reminder_status_enum"), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
