"""Workspace state models."""

from pydantic import BaseModel, Field

from promptjson.models.failure import ClassifiedError
from promptjson.models.record import Enhancement, PromptRecord


class WorkspaceState(BaseModel):
    """What the main workspace view currently displays."""

    generation: int = Field(0, description="Request generation that produced this state")
    prompt: str = ""
    structured_output: str = ""
    bias_detected: bool = False
    bias_report: str | None = None
    enhancement: Enhancement | None = None
    error: ClassifiedError | None = None


class SaveOutcome(BaseModel):
    """Result of saving a workspace result to history."""

    record: PromptRecord
    notice: str | None = Field(None, description="Non-blocking persistence notice")


class GenerateOutcome(BaseModel):
    """Result of a successful generate cycle."""

    state: WorkspaceState
    saved: SaveOutcome | None = None
    bias_notice: str | None = None
