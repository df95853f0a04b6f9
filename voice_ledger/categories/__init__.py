"""Category dictionary package."""

from voice_ledger.categories.dictionary import (
    FALLBACK_COLOR,
    FALLBACK_ICON,
    FALLBACK_NAME,
    CategoryDictionary,
    describe_category,
    get_categories_by_type,
    get_category_by_id,
    get_category_dictionary,
    get_fallback_category,
)

__all__ = [
    "FALLBACK_COLOR",
    "FALLBACK_ICON",
    "FALLBACK_NAME",
    "CategoryDictionary",
    "describe_category",
    "get_categories_by_type",
    "get_category_by_id",
    "get_category_dictionary",
    "get_fallback_category",
]
