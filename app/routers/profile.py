"""
Profile router.

GET /profile   — the user profile (404 until created)
PUT /profile   — create or update
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.profile import ProfileOut, ProfileUpdate
from app.core.errors import ProfileNameRequiredError
from app.services.profile import get_profile, find_profile, upsert_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileOut,
    summary="Get the user profile",
    responses={404: {"model": ErrorResponse, "description": "No profile yet."}},
)
def read_profile(db: Session = Depends(get_db)):
    return ProfileOut.model_validate(get_profile(db))


@router.put(
    "",
    response_model=ProfileOut,
    summary="Create or update the user profile",
    responses={422: {"model": ErrorResponse, "description": "Missing name on first creation."}},
)
def write_profile(payload: ProfileUpdate, db: Session = Depends(get_db)):
    """
    Partial update: only the fields present in the body are written.
    Calorie and protein targets drive the weekly scorecard; when unset the
    scorecard uses 2000 kcal / 100 g.
    """
    fields = payload.model_dump(exclude_unset=True)
    if find_profile(db) is None and not fields.get("name"):
        raise ProfileNameRequiredError()
    return ProfileOut.model_validate(upsert_profile(db, fields))
