"""
Core Data Models for Bill Tracker

These models define the schemas for all data flowing through the ledger.
They are designed to:
1. Enforce type safety at runtime
2. Keep every amount rounded to the cent
3. Be serializable to the storage slot (camelCase JSON, ISO dates)

DESIGN DECISION: BillRecord keeps its due date as the ISO string it was
stored with. Records written by older versions may carry a date that does
not parse; they still load and round-trip untouched, they just never
match a month filter.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from bill_tracker.models.money import ZERO, round2


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_due_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO YYYY-MM-DD string, returning None if it is not a date."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except (TypeError, ValueError):
        return None


def _round_amount(v):
    try:
        return round2(v)
    except TypeError as e:
        raise ValueError(str(e))


# =============================================================================
# CORE BILL MODEL
# =============================================================================

class BillRecord(BaseModel):
    """
    One payable item in the ledger.

    CRITICAL: paid_at is set if and only if paid is True.
    The ledger changes both together; the validator rejects anything else.

    Serialized with camelCase keys (dueDate, paidAt, createdAt) and the
    value as a JSON number.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Identity
    id: str = Field(
        ...,
        min_length=1,
        description="Opaque bill id, unique within the ledger"
    )

    # User-editable fields
    name: str = Field(
        ...,
        min_length=1,
        description="What the bill is for"
    )
    value: Decimal = Field(
        ...,
        ge=0,
        description="Amount, rounded to 2 decimal places"
    )
    due_date: str = Field(
        ...,
        description="Due date as ISO YYYY-MM-DD"
    )

    # Payment status
    paid: bool = Field(
        default=False,
        description="Has this bill been paid?"
    )
    paid_at: Optional[datetime] = Field(
        default=None,
        description="When the bill was marked as paid"
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the bill was added"
    )

    @field_validator("value", mode="before")
    @classmethod
    def round_value(cls, v):
        """Store every amount rounded to the cent."""
        return _round_amount(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v):
        """Accept date objects; keep strings as stored."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        return v

    @model_validator(mode="after")
    def validate_payment_status(self) -> "BillRecord":
        """paid_at must be present exactly when the bill is paid."""
        if self.paid and self.paid_at is None:
            raise ValueError("Paid bill must have paid_at")
        if not self.paid and self.paid_at is not None:
            raise ValueError("Unpaid bill cannot have paid_at")
        return self

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: Decimal) -> float:
        return float(value)

    @property
    def due_on(self) -> Optional[date]:
        """Due date as a date, or None if the stored string does not parse."""
        return parse_due_date(self.due_date)

    def to_storage_dict(self) -> dict:
        """Convert to the JSON-compatible dict written to the storage slot."""
        return self.model_dump(mode="json", by_alias=True)


class BillDraft(BaseModel):
    """
    Validated form input for adding or editing a bill.

    Produced by BillValidator; the ledger never sees raw form values.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    value: Decimal = Field(..., ge=0)
    due_date: date

    @field_validator("value", mode="before")
    @classmethod
    def round_value(cls, v):
        return _round_amount(v)


# =============================================================================
# QUERY MODELS
# =============================================================================

class MonthTotals(BaseModel):
    """
    Totals for one calendar month of due dates.

    Each total was re-rounded after every addition.
    """

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    bill_count: int = Field(default=0, ge=0)

    total_all: Decimal = Field(default=ZERO, description="All bills due in the month")
    total_paid: Decimal = Field(default=ZERO, description="Bills already paid")
    total_pending: Decimal = Field(default=ZERO, description="Bills still to pay")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in form input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'negative')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
