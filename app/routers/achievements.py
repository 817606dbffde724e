"""
Achievements router — badge chains and the unlock ledger.

GET  /achievements                              — progress for every chain
POST /achievements/check                        — unlock every reached milestone
GET  /achievements/unlocked                     — unlock ledger, newest first
POST /achievements/{achievement_id}/notified    — mark an unlock as seen
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.badge_unlock import BadgeUnlock
from app.schemas.achievements import (
    BadgeUnlockOut,
    ChainProgressOut,
    UnlockedBadgeOut,
    UnlockResponse,
)
from app.schemas.common import ErrorResponse
from app.services.badges import (
    get_badge_progress,
    list_unlocks,
    mark_notified,
    unlock_eligible_badges,
)

router = APIRouter(prefix="/achievements", tags=["achievements"])


def _unlock_to_response(u: BadgeUnlock) -> BadgeUnlockOut:
    return BadgeUnlockOut(
        achievement_id=u.achievement_id,
        chain_id=u.chain_id,
        milestone=u.milestone,
        statistic_value=u.statistic_value,
        notified=u.notified,
        unlocked_at=u.unlocked_at.isoformat() if u.unlocked_at else "",
    )


@router.get("", response_model=list[ChainProgressOut], summary="Badge chain progress")
def badge_progress(db: Session = Depends(get_db)):
    """
    For each chain: current statistic, earned milestones, the next milestone
    and the percentage of the way there. Read-only; unlocks nothing.
    """
    return [ChainProgressOut.model_validate(p) for p in get_badge_progress(db)]


@router.post(
    "/check",
    response_model=UnlockResponse,
    summary="Unlock every milestone the current stats have reached",
    responses={409: {"model": ErrorResponse, "description": "Concurrent unlock; retry."}},
)
def check_badges(db: Session = Depends(get_db)):
    """
    Idempotent: a second call without new activity returns an empty list.
    Unlocks are permanent even if the statistic later drops.
    """
    unlocked = unlock_eligible_badges(db)
    return UnlockResponse(newly_unlocked=[UnlockedBadgeOut.model_validate(b) for b in unlocked])


@router.get("/unlocked", response_model=list[BadgeUnlockOut], summary="Unlocked badges")
def unlocked_badges(db: Session = Depends(get_db)):
    return [_unlock_to_response(u) for u in list_unlocks(db)]


@router.post(
    "/{achievement_id}/notified",
    response_model=BadgeUnlockOut,
    summary="Mark an unlock as shown to the user",
    responses={404: {"model": ErrorResponse, "description": "Badge not unlocked."}},
)
def acknowledge_badge(achievement_id: str, db: Session = Depends(get_db)):
    return _unlock_to_response(mark_notified(db, achievement_id))
