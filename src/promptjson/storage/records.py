"""Bounded, deduplicating prompt record stores for history and favorites."""

import json
import logging

from pydantic import ValidationError

from promptjson.exceptions import PersistenceWriteError
from promptjson.models.record import PromptRecord
from promptjson.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "promptHistory"
FAVORITES_KEY = "promptFavorites"
MAX_HISTORY = 50


class RecordStore:
    """
    Ordered collection of PromptRecords serialized under a single key.

    Records are kept most-recent-first and deduplicated by prompt text.
    Every mutation reads the full collection, applies the change and writes
    the full collection back.
    """

    def __init__(self, substrate: KeyValueStore, key: str, max_records: int | None = None):
        """
        Initialize RecordStore.

        Args:
            substrate: Key-value store holding the serialized collection.
            key: Storage key of the collection.
            max_records: Capacity; None means unbounded.
        """
        self.substrate = substrate
        self.key = key
        self.max_records = max(1, int(max_records)) if max_records is not None else None

    def list_records(self) -> list[PromptRecord]:
        """Return records in store order (most recent first)."""
        return self._load_records()

    def get(self, record_id: str) -> PromptRecord | None:
        """Get a record by ID."""
        for record in self._load_records():
            if record.id == record_id:
                return record
        return None

    def find_by_prompt(self, prompt: str) -> PromptRecord | None:
        """Get the record stored for a prompt text."""
        for record in self._load_records():
            if record.prompt == prompt:
                return record
        return None

    def upsert(self, record: PromptRecord) -> PromptRecord:
        """
        Insert a record or merge it into the existing record for the same prompt.

        A new prompt goes to the front and the tail is truncated to capacity.
        An existing prompt is updated in place and keeps its position.

        Returns:
            The record as stored.

        Raises:
            PersistenceWriteError: If the collection cannot be written.
        """
        records = self._load_records()

        for index, existing in enumerate(records):
            if existing.prompt == record.prompt:
                stored = existing.merged_with(record)
                records[index] = stored
                break
        else:
            stored = record
            records.insert(0, stored)
            if self.max_records is not None:
                records = records[: self.max_records]

        self._save_records(records)
        return stored

    def remove(self, record_id: str) -> bool:
        """
        Delete one record. An absent ID is a no-op.

        Returns:
            True if a record was removed.
        """
        records = self._load_records()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return False

        self._save_records(remaining)
        logger.info(f"Removed record {record_id} from {self.key}")
        return True

    def clear(self) -> None:
        """Empty the collection."""
        try:
            self.substrate.delete(self.key)
        except OSError as e:
            logger.error(f"Failed to clear {self.key}: {e}")
            raise PersistenceWriteError(f"Could not clear {self.key}.") from e
        logger.info(f"Cleared {self.key}")

    def _load_records(self) -> list[PromptRecord]:
        """Read the collection; unreadable data counts as empty."""
        try:
            raw = self.substrate.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read {self.key}, treating as empty: {e}")
            return []

        if not raw:
            return []

        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning(f"Corrupted data under {self.key}, treating as empty")
            return []

        if not isinstance(payload, list):
            logger.warning(f"Unexpected data shape under {self.key}, treating as empty")
            return []

        records: list[PromptRecord] = []
        seen_ids: set[str] = set()
        seen_prompts: set[str] = set()
        for item in payload:
            if not isinstance(item, dict):
                continue
            try:
                record = PromptRecord.from_storage(item)
            except ValidationError:
                logger.warning(f"Skipping invalid record under {self.key}")
                continue
            if record.id in seen_ids or record.prompt in seen_prompts:
                continue
            seen_ids.add(record.id)
            seen_prompts.add(record.prompt)
            records.append(record)

        if self.max_records is not None:
            records = records[: self.max_records]
        return records

    def _save_records(self, records: list[PromptRecord]) -> None:
        payload = json.dumps([record.to_storage() for record in records], ensure_ascii=False)
        try:
            self.substrate.set(self.key, payload)
        except OSError as e:
            logger.error(f"Failed to write {self.key}: {e}")
            raise PersistenceWriteError(f"Could not save {self.key}.") from e


class HistoryStore(RecordStore):
    """Prompt history, capped at MAX_HISTORY records."""

    def __init__(self, substrate: KeyValueStore, max_records: int = MAX_HISTORY):
        super().__init__(substrate, HISTORY_KEY, max_records)


class FavoritesStore(RecordStore):
    """User-curated favorites, independent of history and unbounded by default."""

    def __init__(self, substrate: KeyValueStore, max_records: int | None = None):
        super().__init__(substrate, FAVORITES_KEY, max_records)

    def add(self, record: PromptRecord) -> PromptRecord:
        """Store a full copy of a record as a favorite."""
        return self.upsert(record.model_copy(deep=True))
