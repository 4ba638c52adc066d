"""Key-value persistence substrate."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Synchronous string key-value store, the local-storage analogue.

    Implementations give no transactional guarantees across processes;
    callers rewrite whole values and the last writer wins.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Session-scoped store that lives as long as the process."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
