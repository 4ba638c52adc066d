"""Error classification: map model service failures to user-facing messages."""

import logging
import math
import re

from promptjson.exceptions import ModelServiceError
from promptjson.models.failure import ClassifiedError, ErrorCategory, ServiceFailure

logger = logging.getLogger(__name__)

DEFAULT_RETRY_SECONDS = 60
MAX_RETRY_SECONDS = 24 * 60 * 60
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

INVALID_KEY_REASONS = {"API_KEY_INVALID", "API_KEY_EXPIRED"}

_INVALID_KEY_RE = re.compile(
    r"api[\s_-]?key\s+(?:is\s+)?(?:not\s+valid|invalid|expired)|(?:invalid|expired)\s+api[\s_-]?key",
    re.IGNORECASE,
)
_QUOTA_RE = re.compile(
    r"quota|rate[\s_-]?limit|resource[\s_]exhausted|too\s+many\s+requests",
    re.IGNORECASE,
)
_RETRY_IN_RE = re.compile(
    r"retry\s+in\s+(\d+(?:\.\d+)?)\s*(?:s\b|sec\b|secs\b|seconds?\b)",
    re.IGNORECASE,
)


def failure_from_exception(exc: BaseException) -> ServiceFailure:
    """Reduce any exception to the ServiceFailure structure the classifier accepts."""
    if isinstance(exc, ModelServiceError):
        return exc.failure
    return ServiceFailure(message=str(exc) or None)


def _valid_delay(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


def _retry_delay_seconds(failure: ServiceFailure) -> float:
    """Structured retry delay first, then 'retry in N seconds' text, then the default."""
    if _valid_delay(failure.retry_after_seconds):
        return min(failure.retry_after_seconds, MAX_RETRY_SECONDS)
    match = _RETRY_IN_RE.search(failure.message or "")
    if match and _valid_delay(float(match.group(1))):
        return min(float(match.group(1)), MAX_RETRY_SECONDS)
    return DEFAULT_RETRY_SECONDS


def _is_invalid_credentials(failure: ServiceFailure) -> bool:
    if failure.status_code != 400:
        return False
    if (failure.reason_code or "").upper() in INVALID_KEY_REASONS:
        return True
    return bool(_INVALID_KEY_RE.search(failure.message or ""))


def _is_quota_exceeded(failure: ServiceFailure) -> bool:
    return failure.status_code == 429 or bool(_QUOTA_RE.search(failure.message or ""))


def classify(failure: ServiceFailure, generic_message: str | None = None) -> ClassifiedError:
    """
    Classify a service failure into a user-facing error.

    Categories are tried in order: invalid credentials, quota exceeded,
    unauthorized, other bad request, unknown. The first match wins.

    Args:
        failure: The failure reported by the model service adapter.
        generic_message: The calling operation's own wrapper text. An unknown
            failure whose message equals it gets the generic fallback message.

    Returns:
        ClassifiedError whose message is safe to show to the user.
    """
    if _is_invalid_credentials(failure):
        return ClassifiedError(
            category=ErrorCategory.INVALID_CREDENTIALS,
            message=(
                "Your API key is invalid or has expired. Get a new key from "
                "Google AI Studio and update GEMINI_API_KEY in your configuration."
            ),
        )

    if _is_quota_exceeded(failure):
        seconds = max(0, math.ceil(_retry_delay_seconds(failure)))
        minutes = max(1, math.ceil(seconds / 60))
        unit = "minute" if minutes == 1 else "minutes"
        return ClassifiedError(
            category=ErrorCategory.QUOTA_EXCEEDED,
            message=(
                f"API quota exceeded. Please wait about {minutes} {unit} "
                f"({seconds} seconds) before trying again."
            ),
            retry_after_seconds=seconds,
            retry_after_minutes=minutes,
        )

    if failure.status_code == 401:
        return ClassifiedError(
            category=ErrorCategory.UNAUTHORIZED,
            message="Authentication failed. Please verify your API key configuration.",
        )

    if failure.status_code == 400:
        detail = (failure.message or "").strip() or "The request was rejected."
        return ClassifiedError(
            category=ErrorCategory.OTHER_BAD_REQUEST,
            message=f"Invalid request: {detail}",
        )

    message = (failure.message or "").strip()
    if not message or message == generic_message:
        message = GENERIC_ERROR_MESSAGE
    return ClassifiedError(category=ErrorCategory.UNKNOWN, message=message)


def classify_exception(exc: BaseException, generic_message: str | None = None) -> ClassifiedError:
    """Classify an arbitrary exception, logging the raw failure first."""
    failure = failure_from_exception(exc)
    logger.debug(f"Classifying failure: {failure.model_dump()}")
    return classify(failure, generic_message)
