"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a plain async key-value
interface, the same shape as the mobile app's AsyncStorage.
This allows us to:
1. Keep JSON documents on disk for real use
2. Use in-memory storage for testing
3. Add another backend without touching ledger logic

Values are opaque strings; the ledger owns the document format.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for key-value persistence.

    Every call is a suspension point; none is cancellable or retried.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the write fails. Nothing is committed then.
        """
        pass

    @abstractmethod
    async def remove_items(self, keys: Iterable[str]) -> None:
        """
        Remove several keys. Missing keys are ignored.

        Raises:
            StorageError: If a removal fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptRecordError(StorageError):
    """A stored document could not be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Stored record '{key}' is unreadable: {reason}")
