"""
Tests for amount extraction.

Spoken and typed amounts in the forms people actually use:
unit words, the "k" shorthand, grouped digits and bare numbers.
"""

import unicodedata

import pytest

from voice_ledger.parsing.amount import extract_amount, normalize_text


class TestUnitMarkedAmounts:
    """Amounts carrying a thousand or million marker."""

    @pytest.mark.parametrize("text,expected", [
        ("35k", 35_000),
        ("35 k", 35_000),
        ("35K", 35_000),
        ("100 nghìn", 100_000),
        ("100 ngàn", 100_000),
        ("100ngh", 100_000),
        ("1.5 triệu", 1_500_000),
        ("2,5 triệu", 2_500_000),
        ("3 trieu", 3_000_000),
        ("15 TRIỆU", 15_000_000),
    ])
    def test_unit_forms(self, text, expected):
        """Each marker scales the number in front of it."""
        assert extract_amount(text) == expected

    def test_fractional_thousand_rounds_half_up(self):
        """1.5k is 1,500; 0.0005k rounds to 1."""
        assert extract_amount("1.5k") == 1_500
        assert extract_amount("0.0005k") == 1

    def test_thousand_marker_wins_over_million(self):
        """Rules are tried in order and the first match wins."""
        assert extract_amount("500 nghìn hay 2 triệu") == 500_000

    def test_quantity_is_not_the_price(self):
        """A unit-marked price beats a leading quantity."""
        assert extract_amount("mua 2 cái giá 50k") == 50_000

    def test_k_starting_a_word_is_not_a_marker(self):
        """'2 kg' is a weight, not two thousand."""
        assert extract_amount("mua 2 kg thịt") == 2

    @pytest.mark.parametrize("text,expected", [
        ("ăn trưa 50kđ", 50_000),
        ("cafe 35kd", 35_000),
        ("trà sữa 45kvnd", 45_000),
        ("45 kvnđ", 45_000),
    ])
    def test_k_with_currency_tail(self, text, expected):
        """'kđ', 'kd' and 'kvnd' are still thousands."""
        assert extract_amount(text) == expected

    def test_k_before_other_words_is_not_a_marker(self):
        assert extract_amount("2 km") == 2
        assert extract_amount("3 kem") == 3
        assert extract_amount("5 kdong") == 5

    def test_sentence_context(self):
        """Markers are found anywhere in the phrase."""
        assert extract_amount("Mua bánh mì 30k") == 30_000
        assert extract_amount("Đổ xăng 100 nghìn") == 100_000
        assert extract_amount("Nhận lương 15 triệu") == 15_000_000


class TestBareNumbers:
    """Numbers without a unit marker."""

    def test_bare_small_number_is_literal(self):
        """A unit-less small number is taken at face value."""
        assert extract_amount("50") == 50

    @pytest.mark.parametrize("text,expected", [
        ("35.000", 35_000),
        ("35,000", 35_000),
        ("1.200.000", 1_200_000),
        ("1,200,000", 1_200_000),
        ("35000", 35_000),
        ("1234", 1_234),
        ("tiền nhà 1500000", 1_500_000),
        ("chuyển khoản 2000000", 2_000_000),
    ])
    def test_grouped_digits(self, text, expected):
        """Thousand separators are dropped."""
        assert extract_amount(text) == expected

    def test_trailing_punctuation(self):
        """A sentence-ending dot does not split a grouped number."""
        assert extract_amount("hết 35.000.") == 35_000

    def test_decimal_without_unit_is_not_grouped(self):
        """'1.5' has no 3-digit group, so its parts are read separately."""
        assert extract_amount("1.5") == 5

    def test_largest_group_wins(self):
        """Quantities next to prices lose to the larger number."""
        assert extract_amount("3 ly trà sữa 105.000") == 105_000


class TestNoAmount:
    """Phrases without any amount."""

    @pytest.mark.parametrize("text", ["", "không có gì", "ăn sáng", "k"])
    def test_returns_zero(self, text):
        """0 means 'not found', never a zero-value transaction."""
        assert extract_amount(text) == 0


class TestNormalizeText:
    """Tests for matching normalization."""

    def test_lowercases(self):
        assert normalize_text("NHẬN LƯƠNG") == "nhận lương"

    def test_composes_decomposed_input(self):
        """Decomposed diacritics (NFD) compare equal after normalization."""
        decomposed = unicodedata.normalize("NFD", "xăng")
        assert decomposed != "xăng"
        assert normalize_text(decomposed) == "xăng"
