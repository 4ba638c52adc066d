"""Gemini model service backed by the google-genai SDK."""

import json
import logging
import math
import re
from typing import Any

from google import genai
from google.genai import errors, types

from promptjson.exceptions import ModelServiceError
from promptjson.models.failure import ServiceFailure
from promptjson.providers.base import ModelService, OutputT

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key not valid. Please pass a valid API key."
MALFORMED_OUTPUT_MESSAGE = "The model returned output that does not match the expected format."

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)s\s*$")


def _parse_duration(value: Any) -> float | None:
    """Parse a protobuf duration string such as '12s' or '12.5s'."""
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        match = _DURATION_RE.match(value)
        if not match:
            return None
        seconds = float(match.group(1))
    else:
        return None
    return seconds if math.isfinite(seconds) and seconds >= 0 else None


def failure_from_api_error(error: errors.APIError) -> ServiceFailure:
    """
    Map a google-genai APIError into a ServiceFailure.

    Google error bodies look like
    ``{"error": {"code": 429, "message": ..., "details": [{"@type": ..., ...}]}}``;
    ErrorInfo entries carry the reason code and RetryInfo entries the retry delay.
    """
    body = getattr(error, "details", None)
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        body = body["error"]

    reason_code = None
    retry_after = None
    details = body.get("details") if isinstance(body, dict) else None
    for detail in details if isinstance(details, list) else []:
        if not isinstance(detail, dict):
            continue
        type_url = str(detail.get("@type", ""))
        if type_url.endswith("ErrorInfo") and reason_code is None:
            reason_code = detail.get("reason")
        elif type_url.endswith("RetryInfo") and retry_after is None:
            retry_after = _parse_duration(detail.get("retryDelay"))

    return ServiceFailure(
        status_code=getattr(error, "code", None),
        message=getattr(error, "message", None) or str(error),
        retry_after_seconds=retry_after,
        reason_code=reason_code,
    )


class GeminiModelService(ModelService):
    """
    Model service calling Gemini with structured (JSON schema) output.

    The SDK client is built lazily. A service configured without an API key
    can still be constructed; its calls fail with an invalid-credentials
    failure so the error surfaces through normal classification.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        temperature: float | None = None,
        timeout_seconds: int = 120,
        client: Any = None,
    ):
        """
        Initialize GeminiModelService.

        Args:
            api_key: Gemini API key. Empty or None yields a failing service.
            model: Gemini model name.
            temperature: Sampling temperature, or None for the model default.
            timeout_seconds: HTTP timeout for each call.
            client: Pre-built genai client (tests inject a fake here).
        """
        self.api_key = (api_key or "").strip()
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _get_client(self):
        if self._client is not None:
            return self._client
        if not self.api_key:
            raise ModelServiceError(
                ServiceFailure(
                    status_code=400,
                    message=MISSING_KEY_MESSAGE,
                    reason_code="API_KEY_INVALID",
                )
            )
        self._client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=self.timeout_seconds * 1000),
        )
        return self._client

    def _build_config(
        self,
        output_schema: type,
        safety_settings: list[dict[str, str]] | None,
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=output_schema,
            temperature=self.temperature,
            safety_settings=[
                types.SafetySetting(category=s["category"], threshold=s["threshold"])
                for s in safety_settings
            ]
            if safety_settings
            else None,
        )

    async def generate(
        self,
        *,
        name: str,
        instruction: str,
        output_schema: type[OutputT],
        safety_settings: list[dict[str, str]] | None = None,
    ) -> OutputT:
        """Call Gemini and validate the JSON response against output_schema."""
        client = self._get_client()

        logger.debug(f"Calling {self.model} for {name}")
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[
                    types.Content(role="user", parts=[types.Part(text=instruction)]),
                ],
                config=self._build_config(output_schema, safety_settings),
            )
        except errors.APIError as e:
            failure = failure_from_api_error(e)
            logger.warning(f"{name} failed with status {failure.status_code}: {failure.message}")
            raise ModelServiceError(failure) from e
        except Exception as e:
            logger.exception(f"{name} failed before a response was received")
            raise ModelServiceError(ServiceFailure(message=str(e) or type(e).__name__)) from e

        # Parse the JSON response
        try:
            result_data = json.loads(response.text)
            return output_schema.model_validate(result_data)
        except (TypeError, ValueError) as e:
            logger.warning(f"{name} returned malformed output: {e}")
            raise ModelServiceError(ServiceFailure(message=MALFORMED_OUTPUT_MESSAGE)) from e
