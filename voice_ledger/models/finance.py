"""
Core Data Models for Voice Ledger

These models define the schemas for everything the ledger stores or derives.
They are designed to:
1. Enforce type safety at runtime
2. Serialize to the same camelCase JSON documents the mobile app persisted
3. Keep stored entities apart from derived, recomputed figures

DESIGN DECISION: wallet_id and category_id are plain identifier fields.
The store never checks them; the validation boundary does.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


class LedgerModel(BaseModel):
    """Base for persisted models: snake_case in Python, camelCase on disk."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """Dump to the JSON-ready dict written to the key-value store."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Money direction of a transaction or category."""
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def opposite(self) -> "TransactionType":
        if self is TransactionType.INCOME:
            return TransactionType.EXPENSE
        return TransactionType.INCOME


class CreatedBy(str, Enum):
    """How a transaction entered the ledger."""
    VOICE = "voice"
    MANUAL = "manual"
    ADJUSTMENT = "adjustment"  # System-generated balance correction


class GoalType(str, Enum):
    SPENDING_LIMIT = "spending_limit"
    SAVING_TARGET = "saving_target"


class GoalPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class ExpenseLevel(str, Enum):
    """Calendar colour band for a day's spending."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# CATEGORY
# =============================================================================

class Category(LedgerModel):
    """
    A named bucket with the keywords used for automatic classification.

    Categories are compiled in and immutable.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    icon: str
    color: str
    type: TransactionType
    keywords: tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return "other" in self.id


class Classification(BaseModel):
    """Result of classifying a phrase."""
    model_config = ConfigDict(frozen=True)

    type: TransactionType
    category: Category


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionDraft(LedgerModel):
    """
    Transaction fields supplied by the caller.

    The store adds id and created_at when the draft is recorded.
    """

    wallet_id: str = Field(
        ...,
        min_length=1,
        description="Weak reference to a Wallet"
    )
    type: TransactionType
    amount: int = Field(
        ...,
        gt=0,
        description="Amount in the smallest currency unit"
    )
    category_id: str = Field(
        ...,
        min_length=1,
        description="Weak reference to a Category"
    )
    description: str = ""
    date: date
    created_by: CreatedBy = CreatedBy.MANUAL

    @property
    def signed_amount(self) -> int:
        """Income counts positive, expense negative."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount


class Transaction(TransactionDraft):
    """A recorded income or expense event."""

    id: str = Field(default_factory=lambda: _new_id("txn"))
    created_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_draft(cls, draft: TransactionDraft) -> "Transaction":
        return cls(**draft.model_dump())


# =============================================================================
# WALLETS
# =============================================================================

class WalletDraft(LedgerModel):
    """Wallet fields supplied by the caller."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
    )
    balance: int = Field(
        default=0,
        description="Baseline balance; the live balance is always derived"
    )
    icon: str = "💰"
    color: str = "#10B981"
    is_default: bool = False


class Wallet(WalletDraft):
    """A named money container."""

    id: str = Field(default_factory=lambda: _new_id("wallet"))
    created_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_draft(cls, draft: WalletDraft) -> "Wallet":
        return cls(**draft.model_dump())


# =============================================================================
# GOALS
# =============================================================================

class GoalDraft(LedgerModel):
    """
    Spending limit or saving target.

    Stored for forward compatibility; no aggregate reads goals yet.
    """

    wallet_id: Optional[str] = Field(
        default=None,
        description="None applies the goal to every wallet"
    )
    type: GoalType
    name: str = Field(..., min_length=1, max_length=200)
    amount: int = Field(..., gt=0)
    period: GoalPeriod
    category_id: Optional[str] = Field(
        default=None,
        description="None applies the goal to every category"
    )
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True


class Goal(GoalDraft):
    id: str = Field(default_factory=lambda: _new_id("goal"))

    @classmethod
    def from_draft(cls, draft: GoalDraft) -> "Goal":
        return cls(**draft.model_dump())


class FinanceData(LedgerModel):
    """Full data set, used for export and import."""

    wallets: list[Wallet] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)


# =============================================================================
# PARSE RESULT
# =============================================================================

class VoiceParseResult(LedgerModel):
    """
    Structured interpretation of a transcript.

    Ephemeral: shown to the user for review, never persisted as such.
    """

    type: TransactionType
    amount: int = Field(..., gt=0)
    description: str = Field(
        ...,
        description="The transcript, verbatim"
    )
    category_id: str
    category_name: str
    date: date
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
    )


# =============================================================================
# DERIVED FIGURES - always recomputed
# =============================================================================

class MonthlyStats(BaseModel):
    income: int = 0
    expense: int = 0

    @computed_field
    @property
    def balance(self) -> int:
        return self.income - self.expense


class DailyStats(BaseModel):
    """Income and expense totals for one calendar day."""

    date: date
    income: int = 0
    expense: int = 0

    @computed_field
    @property
    def balance(self) -> int:
        return self.income - self.expense

    @property
    def expense_level(self) -> ExpenseLevel:
        if self.expense == 0:
            return ExpenseLevel.NONE
        if self.expense < 100_000:
            return ExpenseLevel.LOW
        if self.expense < 500_000:
            return ExpenseLevel.MEDIUM
        return ExpenseLevel.HIGH


class CategoryStats(BaseModel):
    """One row of a month's expense ranking."""

    category_id: str
    name: str
    icon: str
    color: str
    total: int = Field(ge=0)
    percentage: float = Field(
        ge=0.0,
        le=100.0,
        description="Share of the month's total expense, 0-100"
    )
