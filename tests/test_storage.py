"""
Tests for the key-value storage backends.
"""

import asyncio

import pytest

from voice_ledger.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    StorageError,
)


class TestJsonFileKeyValueStore:
    """Disk-backed store, one file per key."""

    def test_missing_key_is_none(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        assert asyncio.run(store.get_item("@finance_wallets")) is None

    def test_set_then_get(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        asyncio.run(store.set_item("@finance_wallets", '[{"name": "Ví chính"}]'))
        assert asyncio.run(store.get_item("@finance_wallets")) == '[{"name": "Ví chính"}]'

    def test_key_to_file_name(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        assert store.path_for("@finance_wallets") == tmp_path / "finance_wallets.json"
        assert store.path_for("a/b").name == "a_b.json"

    def test_invalid_key(self, tmp_path):
        with pytest.raises(StorageError):
            JsonFileKeyValueStore(tmp_path).path_for("@")

    def test_creates_directory_on_write(self, tmp_path):
        directory = tmp_path / "nested" / "data"
        store = JsonFileKeyValueStore(directory)
        asyncio.run(store.set_item("@finance_goals", "[]"))
        assert (directory / "finance_goals.json").read_text(encoding="utf-8") == "[]"

    def test_overwrite_leaves_no_temp_file(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        asyncio.run(store.set_item("@finance_goals", "[]"))
        asyncio.run(store.set_item("@finance_goals", "[1]"))
        assert sorted(p.name for p in tmp_path.iterdir()) == ["finance_goals.json"]

    def test_remove_items_ignores_missing(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        asyncio.run(store.set_item("@finance_goals", "[]"))
        asyncio.run(store.remove_items(["@finance_goals", "@finance_settings"]))
        assert asyncio.run(store.get_item("@finance_goals")) is None

    def test_unreadable_path_raises_storage_error(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        (tmp_path / "finance_wallets.json").mkdir()
        with pytest.raises(StorageError):
            asyncio.run(store.get_item("@finance_wallets"))


class TestInMemoryKeyValueStore:
    """Dict-backed store used in tests."""

    def test_initial_items(self):
        store = InMemoryKeyValueStore({"a": "1"})
        assert asyncio.run(store.get_item("a")) == "1"

    def test_remove_and_keys(self):
        store = InMemoryKeyValueStore({"a": "1", "b": "2"})
        asyncio.run(store.remove_items(["a", "missing"]))
        assert store.keys() == ["b"]
