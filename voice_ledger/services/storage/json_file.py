"""
JSON File Storage Implementation

One file per key inside a data directory. A key such as
"@finance_wallets" is stored as "finance_wallets.json".

TRADEOFFS:
- Every write rewrites the whole document (fine for personal volumes)
- No locking; concurrent writers must be serialized by the caller
- Writes go through a temp file and os.replace, so a crash never
  leaves a half-written document behind
"""

import asyncio
import os
import re
from pathlib import Path
from typing import Iterable, Optional

from voice_ledger.services.storage.interface import KeyValueStore, StorageError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileKeyValueStore(KeyValueStore):
    """
    Disk-backed key-value store.

    File I/O runs in a worker thread so the event loop is not blocked.
    """

    def __init__(self, directory: Path | str):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Map a storage key to its file."""
        name = _UNSAFE_CHARS.sub("_", key.lstrip("@"))
        if not name:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{name}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def _remove(self, keys: list[str]) -> None:
        for key in keys:
            try:
                self.path_for(key).unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to remove '{key}': {e}") from e

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def remove_items(self, keys: Iterable[str]) -> None:
        await asyncio.to_thread(self._remove, list(keys))
