"""
Transcript Interpretation Pipeline

Composes amount extraction and classification into one step:
transcript -> VoiceParseResult, or None when no amount can be found.
"""

from datetime import date
from typing import Optional

from voice_ledger.categories import get_categories_by_type, get_category_by_id
from voice_ledger.models.finance import VoiceParseResult
from voice_ledger.parsing.amount import extract_amount
from voice_ledger.parsing.classifier import classify

# Placeholder; no match-strength score is computed.
PARSE_CONFIDENCE = 0.8


def interpret(transcript: str, today: Optional[date] = None) -> Optional[VoiceParseResult]:
    """
    Interpret a transcript.

    Args:
        transcript: Raw text from speech recognition or typing
        today: Date to stamp on the result (defaults to the local date)

    Returns:
        The parse result, or None if no amount was found
    """
    amount = extract_amount(transcript)
    if amount <= 0:
        return None

    classification = classify(transcript)

    return VoiceParseResult(
        type=classification.type,
        amount=amount,
        description=transcript,
        category_id=classification.category.id,
        category_name=classification.category.name,
        date=today or date.today(),
        confidence=PARSE_CONFIDENCE,
    )


def change_category(result: VoiceParseResult, category_id: str) -> VoiceParseResult:
    """
    Re-point a result at a category the user picked.

    Raises:
        ValueError: if the id is unknown or belongs to the other type
    """
    category = get_category_by_id(category_id)
    if category is None:
        raise ValueError(f"Unknown category: {category_id}")
    if category.type != result.type:
        raise ValueError(
            f"Category {category_id} is {category.type.value}, "
            f"result is {result.type.value}"
        )
    return result.model_copy(
        update={"category_id": category.id, "category_name": category.name}
    )


def toggle_type(result: VoiceParseResult) -> VoiceParseResult:
    """Flip income/expense; the category resets to the first one of the new type."""
    new_type = result.type.opposite
    first = get_categories_by_type(new_type)[0]
    return result.model_copy(
        update={
            "type": new_type,
            "category_id": first.id,
            "category_name": first.name,
        }
    )
