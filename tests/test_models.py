"""Tests for data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from promptjson.models.failure import ClassifiedError, ErrorCategory
from promptjson.models.record import Enhancement, PromptRecord, generate_record_id
from promptjson.models.workspace import WorkspaceState


class TestPromptRecord:
    """Tests for the prompt record model."""

    def test_record_creation_defaults(self):
        """Test PromptRecord fills id and creation time."""
        record = PromptRecord(title="Profile", prompt="Create a profile")
        assert record.id
        assert isinstance(record.created_at, datetime)
        assert record.created_at.tzinfo is not None
        assert record.structured_output == ""
        assert record.enhancement is None

    def test_prompt_is_required(self):
        with pytest.raises(ValidationError):
            PromptRecord(title="No prompt")

    def test_to_storage(self):
        """Test PromptRecord serialization to storage format."""
        record = PromptRecord(
            title="Profile",
            prompt="Create a profile",
            structured_output='{"name": "string"}',
            enhancement=Enhancement(enhanced_prompt="Better", reasoning="Clearer"),
        )
        data = record.to_storage()
        assert data["prompt"] == "Create a profile"
        assert data["enhancement"] == {"enhanced_prompt": "Better", "reasoning": "Clearer"}
        assert isinstance(data["created_at"], str)

    def test_from_storage(self):
        """Test PromptRecord creation from a storage entry."""
        data = {
            "id": "00000000000000000001-abcdef12",
            "title": "Profile",
            "prompt": "Create a profile",
            "structured_output": "{}",
            "enhancement": None,
            "created_at": "2024-05-01T12:00:00Z",
        }
        record = PromptRecord.from_storage(data)
        assert record.id == "00000000000000000001-abcdef12"
        assert record.created_at.year == 2024

    def test_merge_keeps_identity_and_old_enhancement(self):
        existing = PromptRecord(
            title="Old title",
            prompt="Create a profile",
            structured_output="{}",
            enhancement=Enhancement(enhanced_prompt="Better"),
        )
        newer = PromptRecord(title="", prompt="Create a profile", structured_output='{"a": 1}')

        merged = existing.merged_with(newer)

        assert merged.id == existing.id
        assert merged.created_at == existing.created_at
        assert merged.title == "Old title"
        assert merged.structured_output == '{"a": 1}'
        assert merged.enhancement == existing.enhancement

    def test_generated_ids_are_ordered(self):
        ids = [generate_record_id() for _ in range(100)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 100


class TestFailureModels:
    """Tests for failure classification models."""

    def test_error_category_values(self):
        """Test ErrorCategory enum values."""
        assert ErrorCategory.INVALID_CREDENTIALS.value == "invalid_credentials"
        assert ErrorCategory.QUOTA_EXCEEDED.value == "quota_exceeded"
        assert ErrorCategory.UNAUTHORIZED.value == "unauthorized"
        assert ErrorCategory.OTHER_BAD_REQUEST.value == "other_bad_request"
        assert ErrorCategory.UNKNOWN.value == "unknown"

    def test_workspace_state_defaults(self):
        state = WorkspaceState()
        assert state.generation == 0
        assert state.structured_output == ""
        assert state.error is None

    def test_workspace_state_with_error(self):
        error = ClassifiedError(category=ErrorCategory.UNKNOWN, message="boom")
        state = WorkspaceState(error=error)
        assert state.model_dump(mode="json")["error"]["category"] == "unknown"
