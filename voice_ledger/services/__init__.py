"""Services package."""

from voice_ledger.services.storage import (
    CorruptRecordError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptRecordError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
]
