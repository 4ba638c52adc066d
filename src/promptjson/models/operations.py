"""Output shapes of the prompt operations.

These models double as the response schemas sent to the model service, so
field descriptions are part of the instruction the model sees.
"""

from pydantic import BaseModel, Field


class StructureResult(BaseModel):
    """Structured JSON rendering of a prompt plus bias classification."""

    structured_json: str = Field(
        ..., description="The structured JSON output of the parsed prompt, as a JSON string."
    )
    bias_detected: bool = Field(..., description="Whether bias was detected in the prompt.")
    bias_report: str | None = Field(
        None, description="A report on any biases detected. Null when no bias was detected."
    )


class EnhanceResult(BaseModel):
    """Rewritten prompt with an explanation."""

    enhanced_prompt: str = Field(
        ...,
        description="A single, rewritten version of the prompt with improvements incorporated.",
    )
    reasoning: str = Field(
        ..., description="A short explanation of what was changed and why it helps."
    )


class TitleResult(BaseModel):
    """Short label for a prompt."""

    title: str = Field(
        ..., description="A short, descriptive title for the prompt, between 3 and 6 words."
    )
