"""Stateless prompt operations: Structure, Enhance and Title."""

import logging

from promptjson.exceptions import EmptyInputError
from promptjson.models.operations import EnhanceResult, StructureResult, TitleResult
from promptjson.providers.base import ModelService
from promptjson.services.prompts import (
    ENHANCE_PROMPT,
    STRUCTURE_PROMPT,
    STRUCTURE_SAFETY_SETTINGS,
    TITLE_PROMPT,
)

logger = logging.getLogger(__name__)

FALLBACK_TITLE_WORDS = 5


def fallback_title(prompt_text: str) -> str:
    """Deterministic local title: the first five words of the prompt plus an ellipsis."""
    words = prompt_text.split()
    return " ".join(words[:FALLBACK_TITLE_WORDS]) + "..."


class PromptOperations:
    """
    Wraps the three model calls behind fixed instruction templates.

    Every operation validates its inputs locally and raises EmptyInputError
    before contacting the model service. Service failures propagate unchanged
    as ModelServiceError; classification is the caller's job.
    """

    def __init__(self, model_service: ModelService):
        """
        Initialize PromptOperations.

        Args:
            model_service: Model service used for every call.
        """
        self.model_service = model_service

    async def structure(self, prompt_text: str) -> StructureResult:
        """
        Convert a prompt into a structured JSON candidate with bias detection.

        Args:
            prompt_text: Natural-language prompt.

        Returns:
            StructureResult. structured_json is not validated here.

        Raises:
            EmptyInputError: If the prompt is empty.
            ModelServiceError: If the model call fails.
        """
        if not prompt_text or not prompt_text.strip():
            raise EmptyInputError("Prompt cannot be empty.")

        result = await self.model_service.generate(
            name="structure",
            instruction=STRUCTURE_PROMPT.format(prompt=prompt_text),
            output_schema=StructureResult,
            safety_settings=STRUCTURE_SAFETY_SETTINGS,
        )

        # A report is only meaningful when bias was detected
        if not result.bias_detected and result.bias_report is not None:
            result = result.model_copy(update={"bias_report": None})

        return result

    async def enhance(self, prompt_text: str, structured_json: str) -> EnhanceResult:
        """
        Rewrite a prompt given its structured JSON result.

        Raises:
            EmptyInputError: If either argument is empty.
            ModelServiceError: If the model call fails.
        """
        if not prompt_text or not prompt_text.strip():
            raise EmptyInputError("Prompt cannot be empty.")
        if not structured_json or not structured_json.strip():
            raise EmptyInputError("JSON output cannot be empty.")

        return await self.model_service.generate(
            name="enhance",
            instruction=ENHANCE_PROMPT.format(prompt=prompt_text, json_output=structured_json),
            output_schema=EnhanceResult,
        )

    async def title(self, prompt_text: str) -> TitleResult:
        """Generate a 3-6 word title for a prompt."""
        if not prompt_text or not prompt_text.strip():
            raise EmptyInputError("Prompt cannot be empty.")

        result = await self.model_service.generate(
            name="title",
            instruction=TITLE_PROMPT.format(prompt=prompt_text),
            output_schema=TitleResult,
        )
        return result.model_copy(update={"title": result.title.strip()})
