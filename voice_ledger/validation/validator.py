"""
Input Boundary Validation

DESIGN DECISION: The store accepts whatever it is given. Rules that come
from the product (the wallet cap, references that must resolve, dates
that look wrong) are checked HERE, before a mutation is attempted.

Two kinds of issue:
- errors block the action (unknown wallet, unknown category, sixth wallet)
- warnings are surfaced for review but never block (future date, huge amount)

IMPORTANT: Validation NEVER silently fixes input. It reports.
"""

from datetime import date, timedelta
from typing import Optional

from voice_ledger.categories import get_category_by_id
from voice_ledger.config import LedgerSettings, get_settings
from voice_ledger.models.finance import TransactionDraft, Wallet
from voice_ledger.models.validation import ValidationIssue, ValidationResult


class LedgerValidationError(Exception):
    """Base exception for actions rejected at the input boundary."""
    pass


class WalletLimitReachedError(LedgerValidationError):
    """The user already has the maximum number of wallets."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Đã đạt giới hạn {limit} ví")


class InvalidEntryError(LedgerValidationError):
    """Input has error-level issues."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(i.message for i in result.issues if i.severity == "error")
        super().__init__(f"Invalid {result.subject}: {messages}")


class LedgerValidator:
    """Checks user input against the ledger's current state."""

    def __init__(self, settings: Optional[LedgerSettings] = None):
        self._settings = settings or get_settings().ledger

    @property
    def max_wallets(self) -> int:
        return self._settings.max_wallets

    def validate_transaction(
        self,
        draft: TransactionDraft,
        wallets: list[Wallet],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Check a transaction draft.

        Errors:
        - wallet_id does not name an existing wallet
        - category_id is unknown, or belongs to the other transaction type

        Warnings:
        - date further in the future than the configured tolerance
        - amount above the configured threshold
        """
        issues = []
        today = today or date.today()

        if not any(w.id == draft.wallet_id for w in wallets):
            issues.append(ValidationIssue(
                field="wallet_id",
                issue_type="unknown_reference",
                message=f"Wallet '{draft.wallet_id}' does not exist",
                severity="error",
                suggested_fix="Choose one of your wallets",
            ))

        category = get_category_by_id(draft.category_id)
        if category is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_reference",
                message=f"Category '{draft.category_id}' does not exist",
                severity="error",
                suggested_fix="Pick a category from the list",
            ))
        elif category.type != draft.type:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="type_mismatch",
                message=(
                    f"Category '{category.name}' is for {category.type.value}, "
                    f"not {draft.type.value}"
                ),
                severity="error",
                suggested_fix="Switch the transaction type or the category",
            ))

        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if draft.date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({draft.date.isoformat()}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        if draft.amount > self._settings.large_amount_threshold:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({draft.amount:,}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        return ValidationResult(subject="transaction", issues=issues)

    def check_can_add_wallet(self, wallets: list[Wallet]) -> None:
        """
        Raises:
            WalletLimitReachedError: if the cap is already reached
        """
        if len(wallets) >= self._settings.max_wallets:
            raise WalletLimitReachedError(self._settings.max_wallets)

    def validate_wallet_deletion(
        self,
        wallet_id: str,
        wallets: list[Wallet],
    ) -> ValidationResult:
        """The last remaining wallet cannot be deleted."""
        issues = []

        if len(wallets) <= 1 and any(w.id == wallet_id for w in wallets):
            issues.append(ValidationIssue(
                field="wallet_id",
                issue_type="last_wallet",
                message="The last wallet cannot be deleted",
                severity="error",
                suggested_fix="Create another wallet first",
            ))

        return ValidationResult(subject="wallet", issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text to show the user."""
        if result.is_valid and not result.warnings:
            return "✅ OK"

        lines = []
        for issue in result.issues:
            marker = "❌" if issue.severity == "error" else "⚠️"
            lines.append(f"{marker} {issue.message}")
            if issue.suggested_fix:
                lines.append(f"   💡 {issue.suggested_fix}")
        return "\n".join(lines)
