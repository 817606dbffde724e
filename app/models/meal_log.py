from datetime import datetime, date
from sqlalchemy import Integer, Float, String, DateTime, Date, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class MealType(str, enum.Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class MealLog(Base):
    __tablename__ = "meal_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    meal_type: Mapped[str] = mapped_column(
        Enum(MealType, name="meal_type_enum"), nullable=False
    )
    food_name: Mapped[str] = mapped_column(String(256), nullable=False)
    quantity: Mapped[str | None] = mapped_column(String(64), nullable=True)
    calories: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0, comment="grams")
    carbs: Mapped[float] = mapped_column(Float, nullable=False, default=0, comment="grams")
    fat: Mapped[float] = mapped_column(Float, nullable=False, default=0, comment="grams")
    fiber: Mapped[float | None] = mapped_column(Float, nullable=True, comment="grams")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
