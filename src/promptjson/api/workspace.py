"""Workspace endpoints: generate, enhance, load and reveal."""

import json
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from promptjson.api.operations import PromptRequest
from promptjson.dependencies import WorkspaceServiceDep
from promptjson.middleware.rate_limit import limiter, model_call_limit
from promptjson.models.workspace import GenerateOutcome, WorkspaceState
from promptjson.services.workspace import WorkspaceService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/workspace", response_model=WorkspaceState)
async def get_workspace(workspace: WorkspaceServiceDep):
    """Get the current workspace state."""
    return workspace.state


@router.post("/workspace/generate", response_model=GenerateOutcome)
@limiter.limit(model_call_limit)
async def generate(
    request: Request,
    body: PromptRequest,
    workspace: WorkspaceServiceDep,
):
    """
    Generate structured JSON for a prompt and save it to history.

    A newer generate request supersedes this one; a superseded request
    answers 409 and its result is discarded.
    """
    return await workspace.generate(body.prompt)


@router.post("/workspace/enhance", response_model=GenerateOutcome)
@limiter.limit(model_call_limit)
async def enhance(
    request: Request,
    workspace: WorkspaceServiceDep,
):
    """Enhance the prompt currently shown in the workspace."""
    return await workspace.enhance()


@router.post("/workspace/load", response_model=WorkspaceState)
async def load_from_handoff(workspace: WorkspaceServiceDep):
    """Load the record selected in the history or favorites view."""
    state = workspace.load_from_handoff()
    if state is None:
        raise HTTPException(status_code=404, detail="No record is waiting to be loaded")
    return state


async def reveal_event_generator(workspace: WorkspaceService) -> AsyncGenerator[dict, None]:
    """
    Generate SSE events revealing the structured output.

    Events:
    - chunk: newly revealed text
    - done: the whole output has been revealed
    - cancelled: a newer generate cycle superseded this reveal
    """
    token = workspace.generation.current

    async for chunk in workspace.reveal():
        yield {"event": "chunk", "data": json.dumps({"text": chunk})}

    if workspace.generation.is_current(token):
        yield {"event": "done", "data": json.dumps({"generation": token})}
    else:
        yield {"event": "cancelled", "data": json.dumps({"generation": token})}


@router.get("/workspace/reveal")
async def stream_reveal(workspace: WorkspaceServiceDep):
    """
    Stream the current structured output with a typewriter effect via SSE.

    Example client code:
    ```javascript
    const evtSource = new EventSource('/api/workspace/reveal');
    evtSource.addEventListener('chunk', (e) => {
        output.textContent += JSON.parse(e.data).text;
    });
    ```
    """
    if not workspace.state.structured_output:
        raise HTTPException(status_code=404, detail="Nothing to reveal")

    return EventSourceResponse(reveal_event_generator(workspace))
