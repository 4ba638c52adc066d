"""Exceptions raised by the PromptJSON core."""

from promptjson.models.failure import ClassifiedError, ServiceFailure


class EmptyInputError(ValueError):
    """Raised before any model call when a required input is empty."""


class ModelServiceError(Exception):
    """Raised by a model service adapter when a call fails."""

    def __init__(self, failure: ServiceFailure):
        self.failure = failure
        super().__init__(failure.message or f"Model service failed ({failure.status_code})")


class OperationFailedError(Exception):
    """Raised by the workspace once a failure has been classified for display."""

    def __init__(self, error: ClassifiedError):
        self.error = error
        super().__init__(error.message)


class StaleResultError(Exception):
    """Raised when a result arrives after a newer request has superseded it."""


class PersistenceWriteError(Exception):
    """Raised when a store cannot write its collection. The store stays usable."""
