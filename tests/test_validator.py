"""
Tests for the input boundary validator.
"""

from datetime import date, timedelta

import pytest

from voice_ledger.config import LedgerSettings
from voice_ledger.ledger import default_wallet
from voice_ledger.models.finance import TransactionDraft, TransactionType, Wallet
from voice_ledger.validation import (
    InvalidEntryError,
    LedgerValidator,
    WalletLimitReachedError,
)

TODAY = date(2024, 3, 15)


@pytest.fixture
def validator():
    return LedgerValidator(LedgerSettings())


@pytest.fixture
def wallets():
    return [default_wallet()]


def make_draft(**overrides):
    fields = dict(
        wallet_id="wallet_default",
        type=TransactionType.EXPENSE,
        amount=30_000,
        category_id="food",
        date=TODAY,
    )
    fields.update(overrides)
    return TransactionDraft(**fields)


class TestValidateTransaction:
    """Reference and plausibility checks on a transaction draft."""

    def test_valid(self, validator, wallets):
        result = validator.validate_transaction(make_draft(), wallets, today=TODAY)
        assert result.is_valid
        assert result.issues == []

    def test_unknown_wallet(self, validator, wallets):
        result = validator.validate_transaction(make_draft(wallet_id="gone"), wallets, today=TODAY)
        assert result.has_errors
        assert result.issues[0].field == "wallet_id"

    def test_unknown_category(self, validator, wallets):
        result = validator.validate_transaction(make_draft(category_id="gone"), wallets, today=TODAY)
        assert result.error_count == 1
        assert result.issues[0].issue_type == "unknown_reference"

    def test_category_type_mismatch(self, validator, wallets):
        result = validator.validate_transaction(make_draft(category_id="salary"), wallets, today=TODAY)
        assert result.has_errors
        assert result.issues[0].issue_type == "type_mismatch"

    def test_future_date_is_warning(self, validator, wallets):
        draft = make_draft(date=TODAY + timedelta(days=3))
        result = validator.validate_transaction(draft, wallets, today=TODAY)
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_tomorrow_is_tolerated(self, validator, wallets):
        draft = make_draft(date=TODAY + timedelta(days=1))
        assert validator.validate_transaction(draft, wallets, today=TODAY).issues == []

    def test_large_amount_is_warning(self, wallets):
        validator = LedgerValidator(LedgerSettings(large_amount_threshold=1_000_000))
        result = validator.validate_transaction(make_draft(amount=2_000_000), wallets, today=TODAY)
        assert result.is_valid
        assert result.issues[0].issue_type == "suspicious_value"


class TestWalletRules:
    """Wallet cap and last-wallet protection."""

    def test_default_cap_is_five(self, validator):
        assert validator.max_wallets == 5

    def test_below_cap(self, validator):
        wallets = [Wallet(name=f"Ví {i}") for i in range(4)]
        validator.check_can_add_wallet(wallets)

    def test_at_cap(self, validator):
        wallets = [Wallet(name=f"Ví {i}") for i in range(5)]
        with pytest.raises(WalletLimitReachedError) as exc_info:
            validator.check_can_add_wallet(wallets)
        assert exc_info.value.limit == 5
        assert "5" in str(exc_info.value)

    def test_configurable_cap(self):
        validator = LedgerValidator(LedgerSettings(max_wallets=2))
        with pytest.raises(WalletLimitReachedError):
            validator.check_can_add_wallet([Wallet(name="a"), Wallet(name="b")])

    def test_last_wallet_cannot_be_deleted(self, validator, wallets):
        result = validator.validate_wallet_deletion("wallet_default", wallets)
        assert result.has_errors
        assert result.issues[0].issue_type == "last_wallet"

    def test_one_of_several_can_be_deleted(self, validator, wallets):
        wallets.append(Wallet(name="Ngân hàng"))
        assert validator.validate_wallet_deletion("wallet_default", wallets).is_valid


class TestErrorsAndSummary:
    """Exceptions and user-facing text."""

    def test_invalid_entry_error_carries_result(self, validator, wallets):
        result = validator.validate_transaction(make_draft(wallet_id="gone"), wallets, today=TODAY)
        error = InvalidEntryError(result)
        assert error.result is result
        assert "gone" in str(error)

    def test_summary_ok(self, validator, wallets):
        result = validator.validate_transaction(make_draft(), wallets, today=TODAY)
        assert validator.get_user_friendly_summary(result) == "✅ OK"

    def test_summary_lists_issues(self, validator, wallets):
        result = validator.validate_transaction(make_draft(category_id="gone"), wallets, today=TODAY)
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("❌")
        assert "💡" in summary
