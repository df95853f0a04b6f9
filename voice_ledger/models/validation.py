"""
Validation Models

Results produced by the input boundary before anything reaches the store.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'unknown_reference', 'limit_reached', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating one user action.

    Errors block the action; warnings are shown but never block.
    """

    subject: str = Field(
        ...,
        description="What was validated (e.g., 'transaction', 'wallet')"
    )
    validated_at: datetime = Field(
        default_factory=datetime.now
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def warnings(self) -> list[str]:
        """Messages of the non-blocking issues."""
        return [issue.message for issue in self.issues if issue.severity == "warning"]
