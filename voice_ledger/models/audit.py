"""
Audit Models for Voice Ledger

Every mutation of the ledger and every interpretation attempt is logged.
This provides:
1. Traceability of how each transaction entered the ledger
2. Debugging information when a phrase is misread
3. A record of rejected or blocked user actions

DESIGN DECISION: Audit events are emitted, never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Interpretation
    TRANSCRIPT_INTERPRETED = "transcript_interpreted"
    TRANSCRIPT_REJECTED = "transcript_rejected"

    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    BALANCE_ADJUSTED = "balance_adjusted"

    # Wallets
    WALLET_ADDED = "wallet_added"
    WALLET_UPDATED = "wallet_updated"
    WALLET_DELETED = "wallet_deleted"
    WALLET_LIMIT_REACHED = "wallet_limit_reached"

    # Goals and settings
    GOAL_ADDED = "goal_added"
    SALARY_UPDATED = "salary_updated"

    # Data set
    DATA_IMPORTED = "data_imported"
    DATA_CLEARED = "data_cleared"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'wallet', 'transcript')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Ledger id of the entity this event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Ties together the events of one user action"
    )

    description: str = Field(
        ...,
        max_length=500,
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(txn, correlation_id)
        event = AuditEventBuilder.wallet_limit_reached(5, correlation_id)
    """

    @staticmethod
    def transcript_interpreted(
        transcript: str,
        transaction_type: str,
        amount: int,
        category_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSCRIPT_INTERPRETED,
            entity_type="transcript",
            correlation_id=correlation_id,
            description=f"Transcript read as {transaction_type} of {amount}",
            details={
                "transcript": transcript,
                "type": transaction_type,
                "amount": amount,
                "category_id": category_id,
            },
            is_user_action=True,
        )

    @staticmethod
    def transcript_rejected(
        transcript: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSCRIPT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transcript",
            correlation_id=correlation_id,
            description="No amount found in transcript",
            details={"transcript": transcript},
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        wallet_id: str,
        transaction_type: str,
        amount: int,
        created_by: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction added: {transaction_type} {amount}",
            details={
                "wallet_id": wallet_id,
                "type": transaction_type,
                "amount": amount,
                "created_by": created_by,
            },
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction updated: {', '.join(changed_fields)}",
            details={"changed_fields": changed_fields},
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Transaction deleted",
        )

    @staticmethod
    def balance_adjusted(
        wallet_id: str,
        previous_balance: int,
        target_balance: int,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_ADJUSTED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Balance adjusted from {previous_balance} to {target_balance}",
            details={
                "previous_balance": previous_balance,
                "target_balance": target_balance,
                "transaction_id": transaction_id,
            },
            is_user_action=True,
        )

    @staticmethod
    def wallet_added(
        wallet_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_ADDED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Wallet added: {name}",
            details={"name": name},
        )

    @staticmethod
    def wallet_updated(
        wallet_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_UPDATED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Wallet updated: {', '.join(changed_fields)}",
            details={"changed_fields": changed_fields},
        )

    @staticmethod
    def wallet_deleted(
        wallet_id: str,
        orphaned_transactions: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_DELETED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description="Wallet deleted; its transactions were kept",
            details={"orphaned_transactions": orphaned_transactions},
        )

    @staticmethod
    def wallet_limit_reached(
        limit: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_LIMIT_REACHED,
            severity=AuditSeverity.WARNING,
            entity_type="wallet",
            correlation_id=correlation_id,
            description=f"Wallet rejected: limit of {limit} reached",
            details={"limit": limit},
            is_user_action=True,
        )

    @staticmethod
    def goal_added(
        goal_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_ADDED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Goal added: {name}",
        )

    @staticmethod
    def salary_updated(
        salary: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SALARY_UPDATED,
            entity_type="settings",
            correlation_id=correlation_id,
            description="Monthly salary updated",
            details={"salary": salary},
        )

    @staticmethod
    def data_imported(
        wallets: int,
        transactions: int,
        goals: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_IMPORTED,
            correlation_id=correlation_id,
            description="Finance data imported",
            details={
                "wallets": wallets,
                "transactions": transactions,
                "goals": goals,
            },
        )

    @staticmethod
    def data_cleared(
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_CLEARED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="All finance data cleared",
        )

    @staticmethod
    def validation_failed(
        subject: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=subject,
            correlation_id=correlation_id,
            description=f"{subject.capitalize()} validation failed with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
            correlation_id=correlation_id,
        )
