"""Prompt operation endpoints: Structure, Enhance and Title."""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from promptjson.dependencies import PromptOperationsDep
from promptjson.middleware.rate_limit import limiter, model_call_limit
from promptjson.models.operations import EnhanceResult, StructureResult, TitleResult

logger = logging.getLogger(__name__)

router = APIRouter()


# Request models
class PromptRequest(BaseModel):
    """Request body carrying a prompt."""

    prompt: str = Field(..., max_length=20000, description="Natural-language prompt")


class EnhanceRequest(BaseModel):
    """Request body for the Enhance operation."""

    prompt: str = Field(..., max_length=20000, description="Original prompt")
    json_output: str = Field(..., max_length=200000, description="Structured JSON for the prompt")


@router.post("/structure", response_model=StructureResult)
@limiter.limit(model_call_limit)
async def structure_prompt(
    request: Request,
    body: PromptRequest,
    operations: PromptOperationsDep,
):
    """
    Convert a prompt into structured JSON with bias detection.

    The JSON string is returned exactly as produced by the model.
    """
    return await operations.structure(body.prompt)


@router.post("/enhance", response_model=EnhanceResult)
@limiter.limit(model_call_limit)
async def enhance_prompt(
    request: Request,
    body: EnhanceRequest,
    operations: PromptOperationsDep,
):
    """Rewrite a prompt based on its structured JSON output."""
    return await operations.enhance(body.prompt, body.json_output)


@router.post("/title", response_model=TitleResult)
@limiter.limit(model_call_limit)
async def generate_title(
    request: Request,
    body: PromptRequest,
    operations: PromptOperationsDep,
):
    """Generate a short title for a prompt."""
    return await operations.title(body.prompt)
