"""
Transaction Classifier

Decides income vs. expense, then picks a category by keyword.

The type check is a presence test over a small list of income signal
words; it runs before any category matching, so "nhận lương đi ăn" is
income even though "ăn" is a food keyword.

Keywords match whole words only. Vietnamese syllables share letters
("ăn" sits inside "xăng"), and a plain substring test would file
"đổ xăng" under food.
"""

import re
from functools import lru_cache

from voice_ledger.categories import get_category_dictionary
from voice_ledger.models.finance import Category, Classification, TransactionType
from voice_ledger.parsing.amount import normalize_text

INCOME_KEYWORDS = (
    "lương",        # salary
    "nhận",         # receive
    "bán",          # sell
    "thưởng",       # bonus
    "được cho",     # being given
    "lì xì",        # lucky money
    "tiền mừng",    # congratulatory money
    "hoàn tiền",    # refund
)


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern:
    phrase = r"\s+".join(re.escape(part) for part in normalize_text(keyword).split())
    return re.compile(rf"(?<!\w){phrase}(?!\w)")


def contains_keyword(text: str, keyword: str) -> bool:
    """Whole-word, case-insensitive test. `text` must already be normalized."""
    return _keyword_pattern(keyword).search(text) is not None


def detect_transaction_type(text: str) -> TransactionType:
    lowered = normalize_text(text)
    if any(contains_keyword(lowered, keyword) for keyword in INCOME_KEYWORDS):
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def find_category(text: str, transaction_type: TransactionType) -> Category:
    """
    First category, in declaration order, with a keyword in the text.

    Never returns None: no match yields the type's fallback category.
    """
    lowered = normalize_text(text)
    dictionary = get_category_dictionary()

    for category in dictionary.by_type(transaction_type):
        if any(contains_keyword(lowered, keyword) for keyword in category.keywords):
            return category

    return dictionary.fallback(transaction_type)


def classify(text: str) -> Classification:
    transaction_type = detect_transaction_type(text)
    return Classification(
        type=transaction_type,
        category=find_category(text, transaction_type),
    )
