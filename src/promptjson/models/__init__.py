"""Data models for PromptJSON."""

from promptjson.models.failure import ClassifiedError, ErrorCategory, ServiceFailure
from promptjson.models.operations import EnhanceResult, StructureResult, TitleResult
from promptjson.models.record import Enhancement, PromptRecord, generate_record_id
from promptjson.models.workspace import GenerateOutcome, SaveOutcome, WorkspaceState

__all__ = [
    # Records
    "Enhancement",
    "PromptRecord",
    "generate_record_id",
    # Operations
    "EnhanceResult",
    "StructureResult",
    "TitleResult",
    # Failures
    "ClassifiedError",
    "ErrorCategory",
    "ServiceFailure",
    # Workspace
    "GenerateOutcome",
    "SaveOutcome",
    "WorkspaceState",
]
