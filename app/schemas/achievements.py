"""
Badge schemas.

GET  /achievements           → list[ChainProgressOut]
POST /achievements/check     → UnlockResponse
GET  /achievements/unlocked  → list[BadgeUnlockOut]
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChainProgressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    unit: str
    milestones: list[int]
    current_value: int
    earned_milestones: list[int]
    next_milestone: Optional[int] = Field(default=None, description="null once the chain is complete.")
    prev_milestone: int
    progress_percent: int = Field(description="0–100 toward next_milestone.")
    is_complete: bool


class UnlockedBadgeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    chain_id: str
    milestone: int


class UnlockResponse(BaseModel):
    newly_unlocked: list[UnlockedBadgeOut] = Field(
        description="Milestones unlocked by this call, catalog order, ascending per chain."
    )


class BadgeUnlockOut(BaseModel):
    achievement_id: str
    chain_id: str
    milestone: int
    statistic_value: int = Field(description="Statistic value at unlock time.")
    notified: bool
    unlocked_at: str
