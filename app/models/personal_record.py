"""
PersonalRecord — best-ever value of one metric for one exercise.

One row per (exercise_name, pr_type); the unique constraint is the final
guard against two writers both observing "no record" and inserting twice.
`value` only ever moves up: rows are written on strict improvement, and the
tracker's compare-and-swap update refuses to overwrite a value it did not read.

pr_type values:
  "max_weight"     — heaviest weight lifted (reps stored alongside)
  "max_volume"     — sets × reps × weight of a single log
  "estimated_1rm"  — Epley estimate, one decimal
"""
from datetime import datetime, date
from sqlalchemy import (
    Integer, Float, String, DateTime, Date, Enum, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class PRType(str, enum.Enum):
    max_weight = "max_weight"
    max_volume = "max_volume"
    estimated_1rm = "estimated_1rm"


class PersonalRecord(Base):
    __tablename__ = "personal_records"
    __table_args__ = (
        UniqueConstraint("exercise_name", "pr_type", name="uq_personal_record_exercise_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    exercise_name: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True, comment="Normalized: trimmed, lowercase"
    )
    pr_type: Mapped[str] = mapped_column(Enum(PRType, name="pr_type_enum"), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exercise_log_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("exercise_logs.id", ondelete="SET NULL"), nullable=True
    )
    achieved_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    previous_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
