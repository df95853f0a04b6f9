"""Input boundary validation package."""

from voice_ledger.validation.validator import (
    InvalidEntryError,
    LedgerValidationError,
    LedgerValidator,
    WalletLimitReachedError,
)

__all__ = [
    "InvalidEntryError",
    "LedgerValidationError",
    "LedgerValidator",
    "WalletLimitReachedError",
]
