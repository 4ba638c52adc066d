"""Workspace orchestration: generate, enhance, save and reload prompt results."""

import logging
from collections.abc import AsyncGenerator

from promptjson.exceptions import (
    EmptyInputError,
    ModelServiceError,
    OperationFailedError,
    PersistenceWriteError,
    StaleResultError,
)
from promptjson.models.record import Enhancement, PromptRecord
from promptjson.models.workspace import GenerateOutcome, SaveOutcome, WorkspaceState
from promptjson.services.error_classifier import classify_exception
from promptjson.services.generation import RequestGeneration
from promptjson.services.normalizer import normalize_json
from promptjson.services.prompt_operations import PromptOperations, fallback_title
from promptjson.services.prompts import ENHANCE_FAILED_MESSAGE, STRUCTURE_FAILED_MESSAGE
from promptjson.services.reveal import stream_reveal
from promptjson.storage.handoff import HandoffSlot
from promptjson.storage.records import FavoritesStore, HistoryStore

logger = logging.getLogger(__name__)

DEFAULT_BIAS_NOTICE = "The AI detected potential bias in your prompt."


class WorkspaceService:
    """
    Coordinates prompt operations with the workspace state and local stores.

    Implements:
    - generate(): Structure -> normalize -> bias notice -> save to history
    - enhance(): rewrite the current prompt and attach it to its history record
    - load_from_handoff(): restore a record selected in a list view
    - reveal(): typewriter stream of the current structured output

    Only one generate cycle is current at a time. Every async step captures a
    generation token and results whose token is no longer current are
    discarded with StaleResultError.
    """

    def __init__(
        self,
        operations: PromptOperations,
        history: HistoryStore,
        favorites: FavoritesStore,
        handoff: HandoffSlot,
        reveal_chars_per_tick: int = 1,
        reveal_tick_seconds: float = 1 / 60,
    ):
        """
        Initialize WorkspaceService.

        Args:
            operations: Prompt operations backed by the model service.
            history: History store.
            favorites: Favorites store.
            handoff: Slot used to pass a selected record to the workspace.
            reveal_chars_per_tick: Characters revealed per tick.
            reveal_tick_seconds: Delay between reveal ticks.
        """
        self.operations = operations
        self.history = history
        self.favorites = favorites
        self.handoff = handoff
        self.reveal_chars_per_tick = reveal_chars_per_tick
        self.reveal_tick_seconds = reveal_tick_seconds

        self.generation = RequestGeneration()
        self.state = WorkspaceState()

    async def generate(self, prompt_text: str) -> GenerateOutcome:
        """
        Run the Structure operation for a prompt and save the result.

        Starting a generate cycle clears any previous output, enhancement and
        error before the model is called.

        Args:
            prompt_text: Natural-language prompt.

        Returns:
            GenerateOutcome with the new state, the saved record and any bias notice.

        Raises:
            EmptyInputError: If the prompt is empty.
            OperationFailedError: If the model call fails (already classified).
            StaleResultError: If a newer request superseded this one.
        """
        if not prompt_text or not prompt_text.strip():
            raise EmptyInputError("Prompt cannot be empty.")

        token = self.generation.begin()
        self.state = WorkspaceState(generation=token, prompt=prompt_text)

        try:
            result = await self.operations.structure(prompt_text)
        except ModelServiceError as e:
            if not self.generation.is_current(token):
                raise StaleResultError("Superseded by a newer request") from e
            error = classify_exception(e, STRUCTURE_FAILED_MESSAGE)
            logger.warning(f"Structure failed ({error.category.value}): {e}")
            self.state = self.state.model_copy(update={"error": error})
            raise OperationFailedError(error) from e

        if not self.generation.is_current(token):
            logger.info(f"Discarding stale structure result for generation {token}")
            raise StaleResultError("Superseded by a newer request")

        formatted = normalize_json(result.structured_json)
        self.state = WorkspaceState(
            generation=token,
            prompt=prompt_text,
            structured_output=formatted,
            bias_detected=result.bias_detected,
            bias_report=result.bias_report,
        )

        bias_notice = None
        if result.bias_detected:
            bias_notice = result.bias_report or DEFAULT_BIAS_NOTICE

        saved = await self.save_to_history(prompt_text, formatted, token=token)
        return GenerateOutcome(state=self.state, saved=saved, bias_notice=bias_notice)

    async def enhance(self) -> GenerateOutcome:
        """
        Enhance the prompt currently shown in the workspace.

        Raises:
            EmptyInputError: If there is no structured output to enhance yet.
            OperationFailedError: If the model call fails (already classified).
            StaleResultError: If a newer generate cycle started meanwhile.
        """
        current = self.state
        if not current.structured_output:
            raise EmptyInputError("Generate JSON before requesting an enhancement.")

        token = self.generation.current
        self.state = current.model_copy(update={"enhancement": None})

        try:
            result = await self.operations.enhance(current.prompt, current.structured_output)
        except ModelServiceError as e:
            if not self.generation.is_current(token):
                raise StaleResultError("Superseded by a newer request") from e
            error = classify_exception(e, ENHANCE_FAILED_MESSAGE)
            logger.warning(f"Enhance failed ({error.category.value}): {e}")
            raise OperationFailedError(error) from e

        if not self.generation.is_current(token):
            logger.info(f"Discarding stale enhancement for generation {token}")
            raise StaleResultError("Superseded by a newer request")

        enhancement = Enhancement(enhanced_prompt=result.enhanced_prompt, reasoning=result.reasoning)
        self.state = self.state.model_copy(update={"enhancement": enhancement})

        saved = await self.save_to_history(
            current.prompt, current.structured_output, enhancement=enhancement, token=token
        )
        return GenerateOutcome(state=self.state, saved=saved)

    async def resolve_title(self, prompt_text: str) -> str:
        """Generate a title, falling back to the first words of the prompt on any failure."""
        try:
            result = await self.operations.title(prompt_text)
        except (ModelServiceError, EmptyInputError) as e:
            logger.warning(f"Failed to generate title, using prompt as fallback: {e}")
            return fallback_title(prompt_text)

        return result.title or fallback_title(prompt_text)

    async def save_to_history(
        self,
        prompt_text: str,
        structured_output: str,
        enhancement: Enhancement | None = None,
        title: str | None = None,
        token: int | None = None,
    ) -> SaveOutcome:
        """
        Save a result to history, generating a title when the prompt has none yet.

        Write failures do not fail the save; they come back as a notice.

        Args:
            prompt_text: Prompt the result belongs to.
            structured_output: Normalized structured output.
            enhancement: Enhancement to attach, if any.
            title: Explicit title; generated lazily when omitted.
            token: Generation token to re-check after the title call.

        Raises:
            StaleResultError: If token is given and no longer current.
        """
        if title is None:
            existing = self.history.find_by_prompt(prompt_text)
            if existing and existing.title:
                title = existing.title
            else:
                title = await self.resolve_title(prompt_text)

        if token is not None and not self.generation.is_current(token):
            raise StaleResultError("Superseded by a newer request")

        record = PromptRecord(
            title=title,
            prompt=prompt_text,
            structured_output=structured_output,
            enhancement=enhancement,
        )

        try:
            stored = self.history.upsert(record)
        except PersistenceWriteError as e:
            logger.warning(f"History save failed: {e}")
            return SaveOutcome(record=record, notice="Could not save this result to history.")

        return SaveOutcome(record=stored)

    def open_record(self, record: PromptRecord) -> None:
        """Hand a record selected in a list view over to the workspace."""
        self.handoff.put(record)

    def load_from_handoff(self) -> WorkspaceState | None:
        """
        Take the pending hand-off record and show it in the workspace.

        Loading supersedes any in-flight generate cycle.

        Returns:
            The new state, or None when nothing was pending.
        """
        record = self.handoff.take()
        if record is None:
            return None

        token = self.generation.begin()
        self.state = WorkspaceState(
            generation=token,
            prompt=record.prompt,
            structured_output=record.structured_output,
            enhancement=record.enhancement,
        )
        logger.info(f"Loaded record {record.id} into the workspace")
        return self.state

    def add_favorite(self, record_id: str) -> PromptRecord | None:
        """
        Copy a history record into favorites.

        Returns:
            The stored favorite, or None if the history record does not exist.

        Raises:
            PersistenceWriteError: If favorites cannot be written.
        """
        record = self.history.get(record_id)
        if record is None:
            return None
        return self.favorites.add(record)

    async def reveal(self) -> AsyncGenerator[str, None]:
        """
        Stream the current structured output chunk by chunk.

        The stream stops as soon as a newer generate cycle starts.
        """
        token = self.generation.current
        text = self.state.structured_output

        async for chunk in stream_reveal(
            text,
            chars_per_tick=self.reveal_chars_per_tick,
            tick_seconds=self.reveal_tick_seconds,
            is_current=lambda: self.generation.is_current(token),
        ):
            yield chunk
