"""Shared fixtures for PromptJSON tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from promptjson.dependencies import get_prompt_operations, get_workspace_service
from promptjson.exceptions import ModelServiceError
from promptjson.main import create_app
from promptjson.middleware.rate_limit import limiter
from promptjson.models.failure import ServiceFailure
from promptjson.models.operations import EnhanceResult, StructureResult, TitleResult
from promptjson.providers.base import ModelService
from promptjson.services.prompt_operations import PromptOperations
from promptjson.services.workspace import WorkspaceService
from promptjson.storage import (
    FavoritesStore,
    HandoffSlot,
    HistoryStore,
    InMemoryKeyValueStore,
)


class FakeModelService(ModelService):
    """Model service returning canned results per operation name.

    A canned value may be a model instance, an exception to raise, or a
    callable taking the instruction and returning either.
    """

    def __init__(self, **responses):
        self.responses = {
            "structure": StructureResult(
                structured_json='{"name":"string","email":"string"}',
                bias_detected=False,
            ),
            "enhance": EnhanceResult(
                enhanced_prompt="Create a user profile object with a name and an email address.",
                reasoning="Names the object and clarifies the fields.",
            ),
            "title": TitleResult(title="User Profile Schema"),
        }
        self.responses.update(responses)
        self.calls: list[tuple[str, str]] = []

    async def generate(self, *, name, instruction, output_schema, safety_settings=None):
        self.calls.append((name, instruction))
        response = self.responses[name]
        if callable(response) and not isinstance(response, type):
            response = response(instruction)
        if isinstance(response, BaseException):
            raise response
        return response

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


def service_error(status_code=None, message=None, **kwargs) -> ModelServiceError:
    """Build a ModelServiceError for a canned failure."""
    return ModelServiceError(ServiceFailure(status_code=status_code, message=message, **kwargs))


@pytest.fixture
def model_service():
    return FakeModelService()


@pytest.fixture
def operations(model_service):
    return PromptOperations(model_service)


@pytest.fixture
def substrate():
    return InMemoryKeyValueStore()


@pytest.fixture
def history(substrate):
    return HistoryStore(substrate)


@pytest.fixture
def favorites(substrate):
    return FavoritesStore(substrate)


@pytest.fixture
def workspace(operations, history, favorites):
    return WorkspaceService(
        operations=operations,
        history=history,
        favorites=favorites,
        handoff=HandoffSlot(InMemoryKeyValueStore()),
        reveal_tick_seconds=0,
    )


@pytest.fixture
def app(workspace, operations):
    """Create a fresh app instance wired to fake services.

    Note: ASGITransport does not invoke the lifespan handler.
    """
    application = create_app()
    application.dependency_overrides[get_workspace_service] = lambda: workspace
    application.dependency_overrides[get_prompt_operations] = lambda: operations
    return application


@pytest.fixture
async def client(app, monkeypatch):
    """Create an async HTTP client for testing."""
    monkeypatch.setattr(limiter, "enabled", False)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
