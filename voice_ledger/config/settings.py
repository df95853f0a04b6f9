"""
Configuration Management for Voice Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The category dictionary is deliberately NOT configurable; it is compiled in.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Storage backend: 'json' files on disk or 'memory'"
    )
    data_dir: Path = Field(
        default=Path(".voice_ledger"),
        description="Directory holding one JSON document per storage key"
    )
    key_prefix: str = Field(
        default="@finance",
        min_length=1,
        description="Namespace prefix for every storage key"
    )

    @field_validator('key_prefix')
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        """Keys are joined as '<prefix>_<name>', so a trailing '_' would double up."""
        v = v.rstrip("_")
        if not v:
            raise ValueError("key_prefix must contain more than underscores")
        return v


class LedgerSettings(BaseSettings):
    """
    Ledger rules applied at the input boundary.

    None of these are enforced by the store itself.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Log every audit event, down to debug level"
    )
    max_wallets: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum number of wallets a user may create"
    )
    large_amount_threshold: int = Field(
        default=1_000_000_000,
        ge=1,
        description="Amounts above this raise a (non-blocking) warning"
    )
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days in the future a transaction date can be"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus '<name>_error'
    entries for the sections that failed to load.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "ledger"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
