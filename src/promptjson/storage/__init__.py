"""Local persistence for history, favorites and the workspace hand-off slot."""

from promptjson.storage.base import InMemoryKeyValueStore, KeyValueStore
from promptjson.storage.handoff import HANDOFF_KEY, HandoffSlot
from promptjson.storage.json_file import JsonFileKeyValueStore
from promptjson.storage.records import (
    FAVORITES_KEY,
    HISTORY_KEY,
    MAX_HISTORY,
    FavoritesStore,
    HistoryStore,
    RecordStore,
)

__all__ = [
    "FAVORITES_KEY",
    "HANDOFF_KEY",
    "HISTORY_KEY",
    "MAX_HISTORY",
    "FavoritesStore",
    "HandoffSlot",
    "HistoryStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "RecordStore",
]
