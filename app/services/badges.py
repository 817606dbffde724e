"""
Badge progression engine — milestone unlocks over four statistic chains.

Chains (fixed catalog)
----------------------
  workout_streak   current exercise streak (days)       7 … 365
  exercise_count   lifetime exercise log entries         10 … 1000
  pr_count         exercises holding at least one PR     1 … 50
  variety          distinct muscle groups ever logged    2 … 8

Unlocks
-------
Every milestone unlocks on its own and stays unlocked. A statistic that
jumps across several thresholds at once (bulk import) unlocks all of them in
one call, in ascending order. A second call with no new activity is a no-op.

Each unlock is keyed "<chain_id>_<milestone>" and the badge_unlocks unique
constraint makes the insert atomic. If a concurrent caller wins the insert,
the whole batch is rolled back and RecordConflictError is raised.

Public API
----------
chain_progress(chain, value)           -> ChainProgress        (pure)
eligible_unlocks(stats, unlocked_ids)  -> list[tuple]          (pure)
collect_stats(db, today)               -> dict[str, int]
get_badge_progress(db, today)          -> list[ChainProgress]
unlock_eligible_badges(db, today)      -> list[UnlockedBadge]
list_unlocks(db) / mark_notified(db, achievement_id)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadgeUnlockNotFoundError, RecordConflictError
from app.core.numbers import round_int
from app.models.badge_unlock import BadgeUnlock
from app.models.exercise_log import ExerciseLog
from app.models.personal_record import PersonalRecord
from app.services.streak import exercise_streak

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class StatKey:
    EXERCISE_STREAK    = "exercise_streak"
    EXERCISE_COUNT     = "exercise_count"
    PR_COUNT           = "pr_count"
    MUSCLE_GROUP_COUNT = "muscle_group_count"


@dataclass(frozen=True)
class BadgeChain:
    id: str
    name: str
    icon: str
    unit: str
    milestones: tuple[int, ...]   # ascending
    stat_key: str


BADGE_CHAINS: tuple[BadgeChain, ...] = (
    BadgeChain("workout_streak", "Streak", "flame", "days",
               (7, 14, 30, 60, 90, 180, 365), StatKey.EXERCISE_STREAK),
    BadgeChain("exercise_count", "Exercises", "dumbbell", "",
               (10, 50, 100, 250, 500, 1000), StatKey.EXERCISE_COUNT),
    BadgeChain("pr_count", "PRs", "trophy", "",
               (1, 5, 10, 25, 50), StatKey.PR_COUNT),
    BadgeChain("variety", "Variety", "target", "groups",
               (2, 4, 6, 8), StatKey.MUSCLE_GROUP_COUNT),
)


def achievement_id(chain_id: str, milestone: int) -> str:
    return f"{chain_id}_{milestone}"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class ChainProgress:
    id: str
    name: str
    icon: str
    unit: str
    milestones: list[int]
    current_value: int
    earned_milestones: list[int]
    next_milestone: Optional[int]
    prev_milestone: int
    progress_percent: int
    is_complete: bool


@dataclass(frozen=True)
class UnlockedBadge:
    chain_id: str
    milestone: int


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------

def chain_progress(chain: BadgeChain, value: int) -> ChainProgress:
    earned = [m for m in chain.milestones if m <= value]
    next_milestone = next((m for m in chain.milestones if m > value), None)
    prev_milestone = earned[-1] if earned else 0

    if next_milestone is None:
        percent = 100
    else:
        span = next_milestone - prev_milestone
        percent = round_int((value - prev_milestone) / span * 100) if span > 0 else 0

    return ChainProgress(
        id=chain.id,
        name=chain.name,
        icon=chain.icon,
        unit=chain.unit,
        milestones=list(chain.milestones),
        current_value=value,
        earned_milestones=earned,
        next_milestone=next_milestone,
        prev_milestone=prev_milestone,
        progress_percent=percent,
        is_complete=next_milestone is None,
    )


def eligible_unlocks(
    stats: dict[str, int],
    unlocked_ids: set[str],
) -> list[tuple[BadgeChain, int]]:
    """Every (chain, milestone) reached but not yet unlocked, ascending per chain."""
    out = []
    for chain in BADGE_CHAINS:
        value = stats.get(chain.stat_key, 0)
        for milestone in chain.milestones:
            if achievement_id(chain.id, milestone) in unlocked_ids:
                continue
            if value >= milestone:
                out.append((chain, milestone))
    return out


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def collect_stats(db: Session, today: Optional[date] = None) -> dict[str, int]:
    exercise_count: int = db.query(func.count(ExerciseLog.id)).scalar() or 0
    pr_count: int = (
        db.query(func.count(func.distinct(PersonalRecord.exercise_name))).scalar() or 0
    )
    muscle_group_count: int = (
        db.query(func.count(func.distinct(ExerciseLog.muscle_group)))
        .filter(ExerciseLog.muscle_group.isnot(None))
        .scalar()
        or 0
    )
    return {
        StatKey.EXERCISE_STREAK: exercise_streak(db, today).current,
        StatKey.EXERCISE_COUNT: exercise_count,
        StatKey.PR_COUNT: pr_count,
        StatKey.MUSCLE_GROUP_COUNT: muscle_group_count,
    }


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def get_badge_progress(db: Session, today: Optional[date] = None) -> list[ChainProgress]:
    """Read-only progress for all chains, catalog order."""
    stats = collect_stats(db, today)
    return [chain_progress(chain, stats.get(chain.stat_key, 0)) for chain in BADGE_CHAINS]


def unlock_eligible_badges(db: Session, today: Optional[date] = None) -> list[UnlockedBadge]:
    """
    Unlock every milestone the current statistics have reached.
    Idempotent: returns [] when nothing new qualifies. Commits once.
    """
    stats = collect_stats(db, today)
    unlocked_ids = {row.achievement_id for row in db.query(BadgeUnlock.achievement_id).all()}
    pending = eligible_unlocks(stats, unlocked_ids)
    if not pending:
        return []

    now = datetime.now(tz=timezone.utc)
    for chain, milestone in pending:
        db.add(BadgeUnlock(
            achievement_id=achievement_id(chain.id, milestone),
            chain_id=chain.id,
            milestone=milestone,
            statistic_value=stats.get(chain.stat_key, 0),
            notified=False,
            unlocked_at=now,
        ))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        keys = ",".join(achievement_id(c.id, m) for c, m in pending)
        logger.warning("Badge unlock lost a race on %s", keys)
        raise RecordConflictError("badge_unlock", keys) from exc

    result = [UnlockedBadge(chain_id=c.id, milestone=m) for c, m in pending]
    logger.info("Unlocked badges: %s", ", ".join(achievement_id(b.chain_id, b.milestone) for b in result))
    return result


def list_unlocks(db: Session) -> list[BadgeUnlock]:
    """Unlock ledger, newest first."""
    return (
        db.query(BadgeUnlock)
        .order_by(BadgeUnlock.unlocked_at.desc(), BadgeUnlock.id.desc())
        .all()
    )


def mark_notified(db: Session, achievement: str) -> BadgeUnlock:
    unlock = db.query(BadgeUnlock).filter(BadgeUnlock.achievement_id == achievement).first()
    if unlock is None:
        raise BadgeUnlockNotFoundError(achievement)
    unlock.notified = True
    db.commit()
    db.refresh(unlock)
    return unlock
