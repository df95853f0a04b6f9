"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger is logged.
This provides:
1. Traceability of how each entry got into the ledger
2. Debugging capability for misread transcripts
3. A record of blocked user actions (wallet cap, invalid entries)

The audit logger:
- Writes structured JSON lines through structlog
- Never raises into the caller
- Supports correlation IDs to trace the events of one user action
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from voice_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

AUDIT_LOGGER_NAME = "voice_ledger.audit"


def set_debug_mode(enabled: bool) -> None:
    """
    Let every audit event through (DEBUG) or fall back to the level
    inherited from the stdlib logging configuration.
    """
    level = logging.DEBUG if enabled else logging.NOTSET
    logging.getLogger(AUDIT_LOGGER_NAME).setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Emits one structured log record per AuditEvent, at the level
    matching the event's severity.
    """

    def __init__(self, logger_name: str = AUDIT_LOGGER_NAME):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log call itself failed; never raises.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    def log_transcript_interpreted(
        self,
        transcript: str,
        transaction_type: str,
        amount: int,
        category_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transcript_interpreted(
            transcript=transcript,
            transaction_type=transaction_type,
            amount=amount,
            category_id=category_id,
            correlation_id=correlation_id,
        ))

    def log_transcript_rejected(
        self,
        transcript: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transcript_rejected(
            transcript=transcript,
            correlation_id=correlation_id,
        ))

    def log_transaction_added(
        self,
        transaction_id: str,
        wallet_id: str,
        transaction_type: str,
        amount: int,
        created_by: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            wallet_id=wallet_id,
            transaction_type=transaction_type,
            amount=amount,
            created_by=created_by,
            correlation_id=correlation_id,
        ))

    def log_transaction_updated(
        self,
        transaction_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changed_fields=changed_fields,
            correlation_id=correlation_id,
        ))

    def log_transaction_deleted(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_balance_adjusted(
        self,
        wallet_id: str,
        previous_balance: int,
        target_balance: int,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.balance_adjusted(
            wallet_id=wallet_id,
            previous_balance=previous_balance,
            target_balance=target_balance,
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_wallet_added(
        self,
        wallet_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.wallet_added(
            wallet_id=wallet_id,
            name=name,
            correlation_id=correlation_id,
        ))

    def log_wallet_updated(
        self,
        wallet_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.wallet_updated(
            wallet_id=wallet_id,
            changed_fields=changed_fields,
            correlation_id=correlation_id,
        ))

    def log_wallet_deleted(
        self,
        wallet_id: str,
        orphaned_transactions: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.wallet_deleted(
            wallet_id=wallet_id,
            orphaned_transactions=orphaned_transactions,
            correlation_id=correlation_id,
        ))

    def log_wallet_limit_reached(
        self,
        limit: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.wallet_limit_reached(
            limit=limit,
            correlation_id=correlation_id,
        ))

    def log_goal_added(
        self,
        goal_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.goal_added(
            goal_id=goal_id,
            name=name,
            correlation_id=correlation_id,
        ))

    def log_salary_updated(
        self,
        salary: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.salary_updated(
            salary=salary,
            correlation_id=correlation_id,
        ))

    def log_data_imported(
        self,
        wallets: int,
        transactions: int,
        goals: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.data_imported(
            wallets=wallets,
            transactions=transactions,
            goals=goals,
            correlation_id=correlation_id,
        ))

    def log_data_cleared(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.data_cleared(correlation_id=correlation_id))

    def log_validation_failed(
        self,
        subject: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            subject=subject,
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., saving a voice entry).
    Pass it through all subsequent operations.
    """
    return uuid4()
