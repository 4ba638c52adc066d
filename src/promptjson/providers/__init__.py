"""Model service providers for PromptJSON."""

from promptjson.providers.base import ModelService
from promptjson.providers.gemini import GeminiModelService, failure_from_api_error

__all__ = [
    "GeminiModelService",
    "ModelService",
    "failure_from_api_error",
]
