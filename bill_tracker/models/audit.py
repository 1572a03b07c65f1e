"""
Audit Models for Bill Tracker

Every change to the ledger is logged as a structured event.
This provides:
1. Traceability of what happened to each bill
2. Debugging information when storage goes wrong

DESIGN DECISION: Audit events go to the structured log only.
They are never written to the ledger's storage slot.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from bill_tracker.models.bill import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Mutations
    BILL_ADDED = "bill_added"
    BILL_EDITED = "bill_edited"
    BILL_DELETED = "bill_deleted"
    PAYMENT_STATUS_UPDATED = "payment_status_updated"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    STORAGE_READ_FAILED = "storage_read_failed"
    RECORD_SKIPPED = "record_skipped"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - which bill is this about?
    entity_id: Optional[str] = Field(
        default=None,
        description="Bill id this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.bill_added(bill_id, name, value, due_date)
        event = AuditEventBuilder.payment_toggled(bill_id, paid=True)
    """

    @staticmethod
    def bill_added(
        bill_id: str,
        name: str,
        value: Decimal,
        due_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_ADDED,
            entity_id=bill_id,
            description=f"Bill added: {name} - {value}",
            details={
                "name": name,
                "value": str(value),
                "due_date": due_date,
            },
        )

    @staticmethod
    def bill_edited(
        bill_id: str,
        changes: dict[str, Any],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_EDITED,
            entity_id=bill_id,
            description=f"Bill edited ({len(changes)} fields changed)",
            details={"changes": changes},
        )

    @staticmethod
    def bill_deleted(bill_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_DELETED,
            entity_id=bill_id,
            description=f"Bill deleted: {name}",
            details={"name": name},
        )

    @staticmethod
    def payment_toggled(bill_id: str, paid: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_STATUS_UPDATED,
            entity_id=bill_id,
            description=f"Bill marked as {'paid' if paid else 'pending'}",
            details={"paid": paid},
        )

    @staticmethod
    def ledger_loaded(storage_key: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Ledger loaded with {record_count} bills",
            details={
                "storage_key": storage_key,
                "record_count": record_count,
            },
        )

    @staticmethod
    def storage_read_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not read stored bills; starting with an empty ledger",
            details={"storage_key": storage_key},
            error_message=error_message,
        )

    @staticmethod
    def record_skipped(
        position: int,
        error_message: str,
        bill_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_id=bill_id,
            description=(
                f"Stored bill at position {position} could not be read; "
                "kept in storage unchanged"
            ),
            details={"position": position},
            error_message=error_message,
        )

    @staticmethod
    def save_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not save bills",
            details={"storage_key": storage_key},
            error_message=error_message,
        )
