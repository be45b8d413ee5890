"""
Form Validation Models for Pesa Path

Validation never silently fixes input. It reports issues so the form
can show them next to the offending field.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Form field with the issue ('form' for cross-field issues)"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'too_short', 'exceeds_balance')"
    )
    message: str = Field(
        ...,
        description="Message shown to the user"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class FormResult(BaseModel):
    """
    Result of validating one form submission.

    `value` holds the validated model when there are no errors.
    Warnings never block a submission.
    """

    form: str
    value: Optional[Any] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.value is not None and not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    def message_for(self, field: str) -> Optional[str]:
        """First error message for a field, for inline display."""
        for issue in self.errors:
            if issue.field == field:
                return issue.message
        return None
