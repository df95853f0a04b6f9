"""Audit logging package."""

from voice_ledger.audit.logger import (
    AUDIT_LOGGER_NAME,
    AuditLogger,
    create_correlation_id,
    set_debug_mode,
)

__all__ = [
    "AUDIT_LOGGER_NAME",
    "AuditLogger",
    "create_correlation_id",
    "set_debug_mode",
]
