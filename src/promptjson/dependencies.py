"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from promptjson.config import get_settings
from promptjson.providers.base import ModelService
from promptjson.providers.gemini import GeminiModelService
from promptjson.services.prompt_operations import PromptOperations
from promptjson.services.workspace import WorkspaceService
from promptjson.storage.base import InMemoryKeyValueStore, KeyValueStore
from promptjson.storage.handoff import HandoffSlot
from promptjson.storage.json_file import JsonFileKeyValueStore
from promptjson.storage.records import FavoritesStore, HistoryStore


@lru_cache
def get_model_service() -> ModelService:
    """Get cached Gemini model service."""
    settings = get_settings()
    return GeminiModelService(
        api_key=settings.gemini_api_key,
        model=settings.model,
        temperature=settings.temperature,
        timeout_seconds=settings.request_timeout_seconds,
    )


@lru_cache
def get_local_store() -> KeyValueStore:
    """Get cached persistent key-value store for history and favorites."""
    settings = get_settings()
    return JsonFileKeyValueStore(settings.storage_dir)


@lru_cache
def get_session_store() -> KeyValueStore:
    """Get cached session-scoped key-value store for the hand-off slot."""
    return InMemoryKeyValueStore()


def get_prompt_operations(
    model_service: Annotated[ModelService, Depends(get_model_service)],
) -> PromptOperations:
    """Get PromptOperations instance."""
    return PromptOperations(model_service=model_service)


@lru_cache
def get_workspace_service() -> WorkspaceService:
    """Get the process-wide workspace service."""
    settings = get_settings()
    local_store = get_local_store()
    return WorkspaceService(
        operations=PromptOperations(model_service=get_model_service()),
        history=HistoryStore(local_store, max_records=settings.max_history),
        favorites=FavoritesStore(local_store, max_records=settings.max_favorites),
        handoff=HandoffSlot(get_session_store()),
        reveal_chars_per_tick=settings.reveal_chars_per_tick,
        reveal_tick_seconds=settings.reveal_tick_seconds,
    )


# Type aliases for dependency injection
PromptOperationsDep = Annotated[PromptOperations, Depends(get_prompt_operations)]
WorkspaceServiceDep = Annotated[WorkspaceService, Depends(get_workspace_service)]
