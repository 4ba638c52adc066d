"""Services for PromptJSON."""

from promptjson.services.error_classifier import classify, classify_exception
from promptjson.services.generation import RequestGeneration
from promptjson.services.normalizer import normalize_json
from promptjson.services.prompt_operations import PromptOperations, fallback_title
from promptjson.services.workspace import WorkspaceService

__all__ = [
    "PromptOperations",
    "RequestGeneration",
    "WorkspaceService",
    "classify",
    "classify_exception",
    "fallback_title",
    "normalize_json",
]
