"""
Profile schemas.

GET /profile → ProfileOut
PUT /profile → ProfileUpdate → ProfileOut
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Fields to set. Omitted fields are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    height: Optional[float] = Field(default=None, gt=0, description="cm")
    weight: Optional[float] = Field(default=None, gt=0, description="kg")
    daily_calorie_target: Optional[int] = Field(default=None, gt=0, examples=[2200])
    protein_target: Optional[int] = Field(default=None, gt=0, examples=[140])
    carbs_target: Optional[int] = Field(default=None, gt=0)
    fat_target: Optional[int] = Field(default=None, gt=0)


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    height: Optional[float] = None
    weight: Optional[float] = None
    daily_calorie_target: Optional[int] = None
    protein_target: Optional[int] = None
    carbs_target: Optional[int] = None
    fat_target: Optional[int] = None
