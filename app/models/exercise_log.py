from datetime import datetime, date
from sqlalchemy import Integer, Float, String, Text, DateTime, Date, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class MuscleGroup(str, enum.Enum):
    chest = "chest"
    back = "back"
    shoulders = "shoulders"
    arms = "arms"
    legs = "legs"
    core = "core"
    cardio = "cardio"
    full_body = "full_body"


class ExerciseLog(Base):
    __tablename__ = "exercise_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    exercise_name: Mapped[str] = mapped_column(String(128), nullable=False)
    muscle_group: Mapped[str | None] = mapped_column(
        Enum(MuscleGroup, name="muscle_group_enum"), nullable=True, index=True
    )
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kg")
    duration: Mapped[float | None] = mapped_column(Float, nullable=True, comment="minutes")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
