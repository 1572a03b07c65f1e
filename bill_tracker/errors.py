"""
Ledger exceptions.

ValidationError is a user-facing condition: show it and keep the form.
NotFoundError means the caller's view of the ledger is out of date,
which is a bug in the caller rather than something to show the user.
Storage exceptions live with the storage interface.
"""

from typing import Optional

from bill_tracker.models.bill import ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """Form input rejected; nothing was created, changed or persisted."""

    def __init__(self, issues: list[ValidationIssue], message: Optional[str] = None):
        self.issues = issues
        if message is None:
            message = "; ".join(issue.message for issue in issues) or "Invalid input"
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed, in the order they were checked."""
        return [issue.field for issue in self.issues]


class NotFoundError(LedgerError):
    """No bill with the given id exists in the ledger."""

    def __init__(self, bill_id: str):
        self.bill_id = bill_id
        super().__init__(f"Bill not found: {bill_id}")
