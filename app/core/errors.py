"""
Custom exception hierarchy for FitLog.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from app.schemas.common import FieldError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class FitLogException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class RecordConflictError(FitLogException):
    """
    A concurrent writer changed a personal record or badge unlock between our
    read and our write. The whole operation was rolled back; retrying it is safe.
    """
    http_status = status.HTTP_409_CONFLICT
    code = "RECORD_CONFLICT"

    def __init__(self, entity: str, key: str):
        super().__init__(
            message=f"Concurrent update on {entity} '{key}'. Retry the request.",
            details={"entity": entity, "key": key, "retryable": True},
        )


class ProfileNotFoundError(FitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "PROFILE_NOT_FOUND"

    def __init__(self):
        super().__init__(message="No user profile has been created yet.")


class ProfileNameRequiredError(FitLogException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "PROFILE_NAME_REQUIRED"

    def __init__(self):
        super().__init__(message="`name` is required when creating the profile.")


class ExerciseLogNotFoundError(FitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "EXERCISE_LOG_NOT_FOUND"

    def __init__(self, log_id: int):
        super().__init__(
            message=f"Exercise log {log_id} does not exist.",
            details={"exercise_log_id": log_id},
        )


class MealLogNotFoundError(FitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "MEAL_LOG_NOT_FOUND"

    def __init__(self, log_id: int):
        super().__init__(
            message=f"Meal log {log_id} does not exist.",
            details={"meal_log_id": log_id},
        )


class ReminderNotFoundError(FitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "REMINDER_NOT_FOUND"

    def __init__(self, reminder_id: int):
        super().__init__(
            message=f"Reminder {reminder_id} does not exist.",
            details={"reminder_id": reminder_id},
        )


class BadgeUnlockNotFoundError(FitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "BADGE_UNLOCK_NOT_FOUND"

    def __init__(self, achievement_id: str):
        super().__init__(
            message=f"Badge '{achievement_id}' has not been unlocked.",
            details={"achievement_id": achievement_id},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def fitlog_exception_handler(request: Request, exc: FitLogException) -> JSONResponse:
    if isinstance(exc, RecordConflictError):
        logger.warning("%s %s -> 409 %s", request.method, request.url.path, exc.details.get("key"))
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one FieldError per failed field; the "body" prefix is dropped from paths."""
    field_errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
    )
