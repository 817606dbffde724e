"""
BadgeUnlock — permanent ledger of earned badge milestones.

Append-only. One row per achievement_id ("<chain_id>_<milestone>"); the
unique constraint makes "insert if absent" atomic at the DB level. Rows are
never revised, even if the tracked statistic later drops.

statistic_value: the chain's statistic at the moment of unlock.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class BadgeUnlock(Base):
    __tablename__ = "badge_unlocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    achievement_id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    chain_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    milestone: Mapped[int] = mapped_column(Integer, nullable=False)
    statistic_value: Mapped[int] = mapped_column(Integer, nullable=False)
    notified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="True once the client has shown the unlock to the user",
    )
    unlocked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
