"""Ledger store package."""

from voice_ledger.ledger.store import (
    DEFAULT_WALLET_ID,
    LedgerStore,
    StorageKeys,
    default_wallet,
)

__all__ = [
    "DEFAULT_WALLET_ID",
    "LedgerStore",
    "StorageKeys",
    "default_wallet",
]
