"""Error envelopes shared by every endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """``{status, message, timestamp}`` for every non-validation failure."""

    status: int
    message: str
    timestamp: datetime = Field(default_factory=_now)


class ValidationErrorResponse(BaseModel):
    status: int = 400
    message: str = "input validation failed"
    errors: dict[str, str]
