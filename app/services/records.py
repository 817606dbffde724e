"""
Personal record tracker.

Given one freshly logged strength entry, decide which of the three record
types it beats and write those rows.

  max_weight     = weight                       (reps stored alongside)
  max_volume     = sets × reps × weight
  estimated_1rm  = weight × (1 + reps / 30)     Epley, rounded to 0.1

A record is written only on strict improvement; a tie is not a PR. The
Epley estimate is applied at every rep count, including high-rep sets where
it is known to be loose.

Concurrency
-----------
The tracker reads, compares, then writes each (exercise, type) key:
  - insert:  the unique (exercise_name, pr_type) constraint rejects a second
             writer that also saw "no record".
  - update:  compare-and-swap — UPDATE ... WHERE id = :id AND value = :seen.
             Zero rows updated means someone else moved the record first.
Either case rolls back the whole evaluation and raises RecordConflictError
(409, retryable). One commit per evaluation; it also carries an exercise
log flushed just before, so a rolled-back evaluation leaves no log behind.

Public API
----------
detect_improvements(entry, current)   -> list[PRUpdate]   (pure)
evaluate_prs(db, entry)               -> list[PRUpdate]
get_all_prs(db) / get_prs_for_exercise(db, name) / get_recent_prs(db, limit)
get_pr_count(db) / get_pr_timeline(db, name)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import RecordConflictError
from app.core.numbers import round_half_up
from app.models.exercise_log import ExerciseLog
from app.models.personal_record import PersonalRecord, PRType

logger = logging.getLogger(__name__)

# Evaluation order; also the order of the returned list.
PR_TYPES: tuple[str, ...] = (
    PRType.max_weight.value,
    PRType.max_volume.value,
    PRType.estimated_1rm.value,
)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StrengthEntry:
    """One logged strength set, already validated by the request schema."""
    exercise_name: str
    sets: int
    reps: int
    weight: Optional[float]
    exercise_log_id: Optional[int]
    day: date


@dataclass(frozen=True)
class PRUpdate:
    type: str
    value: float
    previous_value: Optional[float]


def normalize_exercise_name(name: str) -> str:
    return name.strip().lower()


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def _check_contract(entry: StrengthEntry) -> None:
    if not entry.exercise_name or not entry.exercise_name.strip():
        raise ValueError("exercise_name must not be blank")
    if entry.sets <= 0 or entry.reps <= 0:
        raise ValueError(f"sets and reps must be positive (got sets={entry.sets}, reps={entry.reps})")


def candidate_values(entry: StrengthEntry) -> dict[str, float]:
    """The three metric values this entry would set, keyed by pr_type."""
    weight = float(entry.weight)
    return {
        PRType.max_weight.value: weight,
        PRType.max_volume.value: entry.sets * entry.reps * weight,
        PRType.estimated_1rm.value: round_half_up(weight * (1 + entry.reps / 30), 1),
    }


# ---------------------------------------------------------------------------
# Pure comparison
# ---------------------------------------------------------------------------

def detect_improvements(
    entry: StrengthEntry,
    current: dict[str, float],
) -> list[PRUpdate]:
    """
    Compare an entry against the current best values (`{pr_type: value}`;
    missing key = no record yet). Returns the types the entry strictly beats.
    """
    _check_contract(entry)
    if entry.weight is None or entry.weight <= 0:
        return []

    updates: list[PRUpdate] = []
    for pr_type, value in candidate_values(entry).items():
        previous = current.get(pr_type)
        if previous is None or value > previous:
            updates.append(PRUpdate(type=pr_type, value=value, previous_value=previous))
    return updates


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------

def _find_record(db: Session, exercise_name: str, pr_type: str) -> Optional[PersonalRecord]:
    return (
        db.query(PersonalRecord)
        .filter(
            PersonalRecord.exercise_name == exercise_name,
            PersonalRecord.pr_type == pr_type,
        )
        .with_for_update()
        .first()
    )


def _insert_record(db: Session, name: str, upd: PRUpdate, entry: StrengthEntry) -> None:
    db.add(PersonalRecord(
        exercise_name=name,
        pr_type=upd.type,
        value=upd.value,
        reps=entry.reps if upd.type == PRType.max_weight.value else None,
        exercise_log_id=entry.exercise_log_id,
        achieved_date=entry.day,
        previous_value=None,
    ))
    db.flush()


def _swap_record(db: Session, record: PersonalRecord, upd: PRUpdate, entry: StrengthEntry) -> bool:
    """Compare-and-swap on the value we read. Returns False if another writer won."""
    values = {
        PersonalRecord.value: upd.value,
        PersonalRecord.previous_value: record.value,
        PersonalRecord.exercise_log_id: entry.exercise_log_id,
        PersonalRecord.achieved_date: entry.day,
        PersonalRecord.updated_at: datetime.now(tz=timezone.utc),
    }
    if upd.type == PRType.max_weight.value:
        values[PersonalRecord.reps] = entry.reps
    updated = (
        db.query(PersonalRecord)
        .filter(PersonalRecord.id == record.id, PersonalRecord.value == record.value)
        .update(values, synchronize_session=False)
    )
    return updated == 1


# ---------------------------------------------------------------------------
# Public — evaluation
# ---------------------------------------------------------------------------

def evaluate_prs(db: Session, entry: StrengthEntry) -> list[PRUpdate]:
    """
    Evaluate and persist new personal records for one strength entry.
    Returns the updated types (0–3 entries).

    Commits whatever the session has pending, so a freshly flushed exercise
    log is stored in the same transaction as its records. On a lost race
    everything is rolled back, the log included, and the request can be
    repeated as-is.
    """
    _check_contract(entry)
    updates: list[PRUpdate] = []
    name = normalize_exercise_name(entry.exercise_name)

    if entry.weight is not None and entry.weight > 0:
        existing = {pr_type: _find_record(db, name, pr_type) for pr_type in PR_TYPES}
        current = {t: r.value for t, r in existing.items() if r is not None}
        updates = detect_improvements(entry, current)

    for upd in updates:
        key = f"{name}:{upd.type}"
        record = existing[upd.type]
        if record is None:
            try:
                _insert_record(db, name, upd, entry)
            except IntegrityError as exc:
                db.rollback()
                logger.warning("PR insert lost a race on %s", key)
                raise RecordConflictError("personal_record", key) from exc
        elif not _swap_record(db, record, upd, entry):
            db.rollback()
            logger.warning("PR update lost a race on %s", key)
            raise RecordConflictError("personal_record", key)

    db.commit()
    for upd in updates:
        logger.info(
            "New PR %s for %s: %s (was %s)", upd.type, name, upd.value, upd.previous_value
        )
    return updates


def evaluate_log(db: Session, log: ExerciseLog) -> list[PRUpdate]:
    """Adapter: run PR evaluation for a stored or freshly flushed exercise log."""
    return evaluate_prs(db, StrengthEntry(
        exercise_name=log.exercise_name,
        sets=log.sets,
        reps=log.reps,
        weight=log.weight,
        exercise_log_id=log.id,
        day=log.day,
    ))


# ---------------------------------------------------------------------------
# Public — query helpers
# ---------------------------------------------------------------------------

def _record_dict(pr: PersonalRecord, with_previous: bool = False) -> dict:
    out = {"value": pr.value, "date": str(pr.achieved_date)}
    if _ev(pr.pr_type) == PRType.max_weight.value:
        out["reps"] = pr.reps
    if with_previous:
        out["previous_value"] = pr.previous_value
    return out


def get_all_prs(db: Session) -> list[dict]:
    """All records grouped per exercise, exercises in name order."""
    grouped: dict[str, dict] = {}
    for pr in db.query(PersonalRecord).order_by(PersonalRecord.exercise_name).all():
        bucket = grouped.setdefault(pr.exercise_name, {"exercise_name": pr.exercise_name})
        bucket[_ev(pr.pr_type)] = _record_dict(pr)
    return list(grouped.values())


def get_prs_for_exercise(db: Session, exercise_name: str) -> dict:
    name = normalize_exercise_name(exercise_name)
    prs = db.query(PersonalRecord).filter(PersonalRecord.exercise_name == name).all()
    return {_ev(pr.pr_type): _record_dict(pr, with_previous=True) for pr in prs}


def get_recent_prs(db: Session, limit: int = 10) -> list[PersonalRecord]:
    return (
        db.query(PersonalRecord)
        .order_by(
            PersonalRecord.achieved_date.desc(),
            PersonalRecord.created_at.desc(),
            PersonalRecord.id.desc(),
        )
        .limit(limit)
        .all()
    )


def get_pr_count(db: Session) -> dict:
    total = db.query(PersonalRecord).count()
    unique = db.query(PersonalRecord.exercise_name).distinct().count()
    return {"total_prs": total, "unique_exercises": unique}


def get_pr_timeline(db: Session, exercise_name: str) -> list[dict]:
    """
    Max-weight progression for one exercise: every weighted log in date
    order, flagged when it raised the running maximum.
    """
    name = normalize_exercise_name(exercise_name)
    logs = (
        db.query(ExerciseLog)
        .filter(ExerciseLog.weight.isnot(None), ExerciseLog.weight > 0)
        .order_by(ExerciseLog.day, ExerciseLog.id)
        .all()
    )
    best = 0.0
    timeline = []
    for log in logs:
        if normalize_exercise_name(log.exercise_name) != name:
            continue
        was_new_pr = log.weight > best
        if was_new_pr:
            best = log.weight
        timeline.append({"date": str(log.day), "weight": log.weight, "was_new_pr": was_new_pr})
    return timeline
