"""
Data Models Package

This package contains all Pydantic models used in Bill Tracker,
plus the rounding policy every amount goes through.
"""

from bill_tracker.models.bill import (
    BillDraft,
    BillRecord,
    MonthTotals,
    ValidationIssue,
    parse_due_date,
    utc_now,
)
from bill_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from bill_tracker.models.money import add_rounded, round2, sum_rounded

__all__ = [
    # Bill models
    "BillDraft",
    "BillRecord",
    "MonthTotals",
    "ValidationIssue",
    "parse_due_date",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Money
    "add_rounded",
    "round2",
    "sum_rounded",
]
