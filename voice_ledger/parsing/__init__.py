"""Transcript parsing package."""

from voice_ledger.parsing.amount import extract_amount, normalize_text
from voice_ledger.parsing.classifier import (
    INCOME_KEYWORDS,
    classify,
    detect_transaction_type,
    find_category,
)
from voice_ledger.parsing.pipeline import (
    PARSE_CONFIDENCE,
    change_category,
    interpret,
    toggle_type,
)

__all__ = [
    "INCOME_KEYWORDS",
    "PARSE_CONFIDENCE",
    "change_category",
    "classify",
    "detect_transaction_type",
    "extract_amount",
    "find_category",
    "interpret",
    "normalize_text",
    "toggle_type",
]
