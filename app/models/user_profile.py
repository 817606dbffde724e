from datetime import datetime
from sqlalchemy import Integer, Float, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserProfile(Base):
    """Single-row table; the app serves one user."""

    __tablename__ = "user_profile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    height: Mapped[float | None] = mapped_column(Float, nullable=True, comment="cm")
    weight: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kg")
    daily_calorie_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    protein_target: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="grams/day")
    carbs_target: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="grams/day")
    fat_target: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="grams/day")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
