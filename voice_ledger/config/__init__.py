"""Configuration package."""

from voice_ledger.config.settings import (
    LedgerSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LedgerSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
