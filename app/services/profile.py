"""
Profile service: the single user profile and the nutrition targets derived
from it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ProfileNotFoundError
from app.models.user_profile import UserProfile


@dataclass(frozen=True)
class NutritionTargets:
    calories: int
    protein: int


def find_profile(db: Session) -> Optional[UserProfile]:
    return db.query(UserProfile).order_by(UserProfile.id).first()


def get_profile(db: Session) -> UserProfile:
    """Return the profile; raises ProfileNotFoundError when none exists."""
    profile = find_profile(db)
    if profile is None:
        raise ProfileNotFoundError()
    return profile


def upsert_profile(db: Session, fields: dict[str, Any]) -> UserProfile:
    """Create the profile or patch the given fields onto the existing one."""
    profile = find_profile(db)
    if profile is None:
        profile = UserProfile(**fields)
        db.add(profile)
    else:
        for key, value in fields.items():
            setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def get_targets(db: Session) -> NutritionTargets:
    """Daily calorie / protein targets. Missing or zero values fall back to defaults."""
    profile = find_profile(db)
    calories = profile.daily_calorie_target if profile else None
    protein = profile.protein_target if profile else None
    return NutritionTargets(
        calories=calories or settings.DEFAULT_CALORIE_TARGET,
        protein=protein or settings.DEFAULT_PROTEIN_TARGET,
    )
