"""Service failure and classified error models."""

from enum import Enum

from pydantic import BaseModel, Field


class ServiceFailure(BaseModel):
    """Transport-independent description of a model service failure."""

    status_code: int | None = Field(None, description="HTTP-like status code")
    message: str | None = Field(None, description="Service-provided message")
    retry_after_seconds: float | None = Field(None, description="Structured retry delay")
    reason_code: str | None = Field(None, description="Error-info reason, e.g. API_KEY_INVALID")


class ErrorCategory(str, Enum):
    """User-facing error categories, in classification precedence order."""

    INVALID_CREDENTIALS = "invalid_credentials"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNAUTHORIZED = "unauthorized"
    OTHER_BAD_REQUEST = "other_bad_request"
    UNKNOWN = "unknown"


class ClassifiedError(BaseModel):
    """A failure mapped to a category and a display message."""

    category: ErrorCategory
    message: str
    retry_after_seconds: int | None = None
    retry_after_minutes: int | None = None
