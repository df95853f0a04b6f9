"""In-memory key-value store, for tests and throwaway sessions."""

from typing import Iterable, Optional

from voice_ledger.services.storage.interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_items(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)
