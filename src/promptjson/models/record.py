"""Prompt record model stored in history and favorites."""

import threading
import time
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

_id_lock = threading.Lock()
_last_id_ns = 0


def generate_record_id() -> str:
    """
    Generate a unique, creation-ordered record ID.

    The nanosecond clock is forced to be strictly increasing within the
    process so that lexical order of IDs matches creation order.
    """
    global _last_id_ns
    with _id_lock:
        now = max(time.time_ns(), _last_id_ns + 1)
        _last_id_ns = now
    return f"{now:020d}-{uuid.uuid4().hex[:8]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Enhancement(BaseModel):
    """Rewritten prompt produced by the Enhance operation."""

    enhanced_prompt: str = Field(..., description="Complete rewritten prompt")
    reasoning: str = Field("", description="Explanation of the changes")


class PromptRecord(BaseModel):
    """One prompt interaction cycle kept in history or favorites."""

    id: str = Field(default_factory=generate_record_id, description="Record ID")
    title: str = Field(..., description="Short list label")
    prompt: str = Field(..., description="Original natural-language prompt")
    structured_output: str = Field("", description="Normalized JSON text or raw text")
    enhancement: Enhancement | None = Field(None, description="Enhancement, if requested")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation time")

    def to_storage(self) -> dict:
        """Convert to the serialized storage format."""
        return self.model_dump(mode="json")

    @classmethod
    def from_storage(cls, data: dict) -> "PromptRecord":
        """Create from a serialized storage entry."""
        return cls.model_validate(data)

    def merged_with(self, newer: "PromptRecord") -> "PromptRecord":
        """
        Merge a newer submission of the same prompt into this record.

        The existing ID, prompt and creation time are kept. Output and title
        are overwritten; the previous enhancement survives when the newer
        record carries none.
        """
        return self.model_copy(
            update={
                "title": newer.title or self.title,
                "structured_output": newer.structured_output,
                "enhancement": newer.enhancement or self.enhancement,
            }
        )
