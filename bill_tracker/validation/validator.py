"""
Form Input Validation

DESIGN DECISION: Add and edit share one validator. It turns raw form
values (strings from a text box, floats from a number input, date objects
from a date picker) into a BillDraft, or raises a single ValidationError
listing every field that failed.

Checks:
- name is present and not just whitespace
- value is present, numeric, finite and not negative
- due date is present and is a real calendar date

IMPORTANT: Validation NEVER silently fixes issues beyond trimming the
name and rounding the value to the cent. Nothing is persisted when
validation fails.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from bill_tracker.errors import ValidationError
from bill_tracker.models.bill import BillDraft, ValidationIssue
from bill_tracker.models.money import round2, to_decimal


# Blocking prompts shown to the user (pt-BR)
MISSING_FIELDS_PROMPT = "Preencha todos os campos."
INVALID_VALUE_PROMPT = (
    "Valor inválido. Use apenas números, como 1234.56 ou 1234,56, "
    "sem separador de milhar."
)
INVALID_DATE_PROMPT = "Data de vencimento inválida."


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BillValidator:
    """Validates add/edit form input."""

    def _validate_name(self, name: Any) -> list[ValidationIssue]:
        if _is_blank(name):
            return [ValidationIssue(
                field="name",
                issue_type="missing",
                message="Bill name is required",
            )]
        if not isinstance(name, str):
            return [ValidationIssue(
                field="name",
                issue_type="invalid_format",
                message=f"Bill name must be text, got {type(name).__name__}",
            )]
        return []

    def _parse_value(self, value: Any) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Parse the amount.

        Accepts "10.50" and the comma-decimal form "10,50" typed in a
        pt-BR text box. Thousands separators ("1.234,56") are not accepted.
        """
        if _is_blank(value):
            return None, [ValidationIssue(
                field="value",
                issue_type="missing",
                message="Bill value is required",
            )]

        if isinstance(value, str):
            value = value.strip()
            if "," in value and "." not in value:
                value = value.replace(",", ".")

        try:
            amount = to_decimal(value)
            rounded = round2(amount)
        except (TypeError, ValueError):
            return None, [ValidationIssue(
                field="value",
                issue_type="invalid_format",
                message=f"Bill value is not a number: {value!r}",
            )]

        if amount < 0:
            return None, [ValidationIssue(
                field="value",
                issue_type="negative",
                message="Bill value cannot be negative",
            )]

        return rounded, []

    def _parse_due_date(self, due_date: Any) -> tuple[Optional[date], list[ValidationIssue]]:
        if _is_blank(due_date):
            return None, [ValidationIssue(
                field="due_date",
                issue_type="missing",
                message="Due date is required",
            )]

        if isinstance(due_date, datetime):
            return due_date.date(), []
        if isinstance(due_date, date):
            return due_date, []

        if isinstance(due_date, str):
            try:
                return date.fromisoformat(due_date.strip()), []
            except ValueError:
                pass

        return None, [ValidationIssue(
            field="due_date",
            issue_type="invalid_format",
            message=f"Due date must be a YYYY-MM-DD date: {due_date!r}",
        )]

    def validate(self, name: Any, value: Any, due_date: Any) -> BillDraft:
        """
        Validate form input.

        Returns:
            A BillDraft with trimmed name, rounded value and parsed date

        Raises:
            ValidationError: Listing every failing field
        """
        issues = self._validate_name(name)

        amount, value_issues = self._parse_value(value)
        issues.extend(value_issues)

        parsed_date, date_issues = self._parse_due_date(due_date)
        issues.extend(date_issues)

        if issues:
            raise ValidationError(issues)

        return BillDraft(name=name, value=amount, due_date=parsed_date)

    def get_user_friendly_summary(self, error: ValidationError) -> str:
        """
        Generate the blocking prompt shown to the user.

        Missing fields take priority, then a bad value, then a bad date.
        """
        issue_types = {(issue.field, issue.issue_type) for issue in error.issues}

        if any(issue_type == "missing" for _, issue_type in issue_types):
            return MISSING_FIELDS_PROMPT
        if any(field == "value" for field, _ in issue_types):
            return INVALID_VALUE_PROMPT
        if any(field == "due_date" for field, _ in issue_types):
            return INVALID_DATE_PROMPT
        return str(error)
