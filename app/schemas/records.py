"""
Personal record schemas.

POST /records/check      → PRCheckRequest → PRCheckResponse
GET  /records            → list[ExercisePRsOut]
GET  /records/recent     → list[PersonalRecordOut]
GET  /records/count      → PRCountOut
GET  /records/timeline   → list[TimelinePointOut]
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.logs import PRUpdateOut


class PRCheckRequest(BaseModel):
    exercise_log_id: int = Field(gt=0, description="Stored exercise log to evaluate.")


class PRCheckResponse(BaseModel):
    new_prs: list[PRUpdateOut]


class RecordValueOut(BaseModel):
    value: float
    date: str
    reps: Optional[int] = None
    previous_value: Optional[float] = None


class ExercisePRsOut(BaseModel):
    exercise_name: str
    max_weight: Optional[RecordValueOut] = None
    max_volume: Optional[RecordValueOut] = None
    estimated_1rm: Optional[RecordValueOut] = None


class PersonalRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    exercise_name: str
    pr_type: str
    value: float
    reps: Optional[int] = None
    achieved_date: str
    previous_value: Optional[float] = None
    exercise_log_id: Optional[int] = None


class PRCountOut(BaseModel):
    total_prs: int
    unique_exercises: int = Field(description="Exercises holding at least one record.")


class TimelinePointOut(BaseModel):
    date: str
    weight: float
    was_new_pr: bool
