"""Rate limiting for model-calling endpoints using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from promptjson.config import get_settings


def model_call_limit() -> str:
    """Rate limit applied to endpoints that spend model quota."""
    return get_settings().rate_limit


# Create limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",  # In-memory storage (single local instance)
)


# Export limiter
__all__ = ["limiter", "model_call_limit"]
