"""
Amount Extraction

Reads a money amount out of a short Vietnamese phrase.

Rules are tried in order and the first match wins:
1. "<n> nghìn" / "<n> ngàn" / "<n> ngh"   -> n * 1,000
2. "<n>k"                                 -> n * 1,000
3. "<n> triệu" / "<n> trieu"              -> n * 1,000,000
4. otherwise the LARGEST digit group ("50", "35.000", "1,200,000")
5. otherwise 0

The largest bare number wins in rule 4 because spoken phrases mention
quantities ("2 cái") next to prices and the price is almost always bigger.
A bare small number ("50") is taken at face value.
"""

import re
import unicodedata
from decimal import ROUND_HALF_UP, Decimal

THOUSAND = Decimal(1_000)
MILLION = Decimal(1_000_000)

# Leading number of a unit-marked amount: "35", "1.5", "2,5"
_NUMBER = r"([0-9]+(?:[.,][0-9]+)?)"

_THOUSAND_WORD = re.compile(_NUMBER + r"\s*(?:nghìn|ngàn|ngh)")
# "k" may carry a currency tail ("50kđ", "45kvnd") but must not start
# another word ("2 kg", "2 kem")
_K_SUFFIX = re.compile(_NUMBER + r"\s*k(?:vn[dđ]|[dđ])?(?![^\W\d_])")
_MILLION_WORD = re.compile(_NUMBER + r"\s*tri[ệe]u")

# Either 1-3 digits followed by "."/","-separated groups of exactly 3
# ("35.000", "1,200,000"), or a whole unseparated digit run ("35000")
_DIGIT_GROUP = re.compile(
    r"(?<![0-9])[0-9]{1,3}(?:[.,][0-9]{3})+(?![0-9]|[.,][0-9])"
    r"|[0-9]+"
)

_UNIT_RULES = (
    (_THOUSAND_WORD, THOUSAND),
    (_K_SUFFIX, THOUSAND),
    (_MILLION_WORD, MILLION),
)


def normalize_text(text: str) -> str:
    """NFC + lowercase, for matching only."""
    return unicodedata.normalize("NFC", text).lower()


def _scaled(number: str, multiplier: Decimal) -> int:
    value = Decimal(number.replace(",", ".")) * multiplier
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def extract_amount(text: str) -> int:
    """
    Extract a money amount from free text.

    Returns 0 when nothing parseable is found; callers must read 0 as
    "no amount", never as a zero-value transaction.
    """
    lowered = normalize_text(text)

    for pattern, multiplier in _UNIT_RULES:
        match = pattern.search(lowered)
        if match:
            return _scaled(match.group(1), multiplier)

    groups = _DIGIT_GROUP.findall(lowered)
    if not groups:
        return 0

    return max(int(re.sub(r"[.,]", "", group)) for group in groups)
