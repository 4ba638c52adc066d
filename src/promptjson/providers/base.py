"""Abstract base class for model services - text generation abstraction layer."""

from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel

OutputT = TypeVar("OutputT", bound=BaseModel)


class ModelService(ABC):
    """
    Abstract base class for the hosted text-generation service.

    This interface hides the transport so prompt operations work with any
    backend. Implementations must:
    - Return a value conforming to the declared output shape
    - Raise ModelServiceError carrying a ServiceFailure on any failure
    """

    @abstractmethod
    async def generate(
        self,
        *,
        name: str,
        instruction: str,
        output_schema: type[OutputT],
        safety_settings: list[dict[str, str]] | None = None,
    ) -> OutputT:
        """
        Run one template-filled instruction against the model.

        Args:
            name: Operation name, used for logging.
            instruction: Fully rendered instruction text.
            output_schema: Pydantic model describing the expected output.
            safety_settings: Optional list of {"category", "threshold"} pairs.

        Returns:
            An instance of output_schema.

        Raises:
            ModelServiceError: If the call fails or the output does not conform.
        """
        pass
