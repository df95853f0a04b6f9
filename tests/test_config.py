"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from voice_ledger.config import (
    LedgerSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LEDGER_STORAGE_BACKEND",
        "LEDGER_STORAGE_DATA_DIR",
        "LEDGER_STORAGE_KEY_PREFIX",
        "LEDGER_MAX_WALLETS",
        "LEDGER_DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Backend selection and key namespace."""

    def test_defaults(self):
        settings = StorageSettings()
        assert settings.backend == "json"
        assert settings.data_dir == Path(".voice_ledger")
        assert settings.key_prefix == "@finance"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("LEDGER_STORAGE_KEY_PREFIX", "@test_")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.key_prefix == "@test"

    @pytest.mark.parametrize("prefix", ["_", "___"])
    def test_prefix_of_only_underscores_rejected(self, prefix):
        """Stripping the separator must not leave an empty namespace."""
        with pytest.raises(ValidationError):
            StorageSettings(key_prefix=prefix)

    def test_prefix_from_environment_rejected_when_empty(self, monkeypatch):
        monkeypatch.setenv("LEDGER_STORAGE_KEY_PREFIX", "_")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            StorageSettings(backend="sqlite")


class TestLedgerSettings:
    """Rules applied at the input boundary."""

    def test_defaults(self):
        settings = LedgerSettings()
        assert settings.max_wallets == 5
        assert settings.future_date_tolerance_days == 1
        assert settings.debug_mode is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("LEDGER_MAX_WALLETS", "3")
        assert LedgerSettings().max_wallets == 3

    def test_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            LedgerSettings(max_wallets=0)


class TestSettings:
    """Root container and cache."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_sections(self):
        settings = get_settings()
        assert settings.storage.backend == "json"
        assert settings.ledger.max_wallets == 5

    def test_validate_all(self):
        assert validate_all_settings() == {"storage": True, "ledger": True}

    def test_validate_all_reports_errors(self, monkeypatch):
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "sqlite")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["ledger"] is True
