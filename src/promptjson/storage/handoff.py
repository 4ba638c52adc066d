"""Single-slot hand-off of a selected record to the workspace."""

import json
import logging

from pydantic import ValidationError

from promptjson.models.record import PromptRecord
from promptjson.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

HANDOFF_KEY = "loadFromHistory"


class HandoffSlot:
    """
    Session-scoped slot written once by a list view and taken once by the workspace.

    take() always deletes the slot, even when its content cannot be parsed.
    """

    def __init__(self, substrate: KeyValueStore, key: str = HANDOFF_KEY):
        self.substrate = substrate
        self.key = key

    def put(self, record: PromptRecord) -> None:
        """Write the selected record, replacing any pending one."""
        self.substrate.set(self.key, json.dumps(record.to_storage(), ensure_ascii=False))

    def take(self) -> PromptRecord | None:
        """Read and delete the pending record, if any."""
        raw = self.substrate.get(self.key)
        if raw is None:
            return None

        try:
            return PromptRecord.from_storage(json.loads(raw))
        except (ValueError, TypeError, ValidationError):
            logger.warning("Discarding unreadable hand-off record")
            return None
        finally:
            self.substrate.delete(self.key)
