"""
Error envelope shared by every router.

    {"code": "RECORD_CONFLICT", "message": "...", "details": {...}}
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """One failed request field, as listed under details.errors on a 422."""
    field: str = Field(examples=["sets"])
    message: str
    type: str = Field(examples=["greater_than"])


class ErrorResponse(BaseModel):
    code: str = Field(
        description="Machine-readable error code.",
        examples=["RECORD_CONFLICT"],
    )
    message: str
    details: Optional[dict[str, Any]] = Field(
        default=None,
        examples=[{"entity": "personal_record", "key": "bench press:max_weight", "retryable": True}],
    )
