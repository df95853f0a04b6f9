"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
JSON files on disk are the default backend; in-memory is for tests.
"""

from voice_ledger.services.storage.interface import (
    CorruptRecordError,
    KeyValueStore,
    StorageError,
)
from voice_ledger.services.storage.json_file import JsonFileKeyValueStore
from voice_ledger.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptRecordError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
