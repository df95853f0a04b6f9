"""
Data Models Package

This package contains all Pydantic models used by Voice Ledger.
All data flowing through the ledger must conform to these schemas.
"""

from voice_ledger.models.finance import (
    Category,
    CategoryStats,
    Classification,
    CreatedBy,
    DailyStats,
    ExpenseLevel,
    FinanceData,
    Goal,
    GoalDraft,
    GoalPeriod,
    GoalType,
    MonthlyStats,
    Transaction,
    TransactionDraft,
    TransactionType,
    VoiceParseResult,
    Wallet,
    WalletDraft,
)
from voice_ledger.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from voice_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Category",
    "CategoryStats",
    "Classification",
    "CreatedBy",
    "DailyStats",
    "ExpenseLevel",
    "FinanceData",
    "Goal",
    "GoalDraft",
    "GoalPeriod",
    "GoalType",
    "MonthlyStats",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "VoiceParseResult",
    "Wallet",
    "WalletDraft",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
