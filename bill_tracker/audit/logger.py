"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of each bill's history
2. Debugging capability when stored data goes bad

The audit logger:
- Is synchronous, like the ledger
- Gracefully handles failures (doesn't break a ledger operation if logging fails)
- Writes structured JSON lines through structlog
"""

import logging
from typing import Any, Optional

import structlog

from bill_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the stdlib root logger at `level`.

    Safe to call more than once; the last level wins.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    One structured log line per event, at the level matching the
    event's severity.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: structlog-compatible logger. Defaults to the
                    bill_tracker.audit logger.
        """
        self._logger = logger or structlog.get_logger("bill_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
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
            # Logging failures are reported, not raised
            return False

        return True

    def log_bill_added(self, bill_id: str, name: str, value, due_date: str) -> None:
        """Log a new bill."""
        self.log(AuditEventBuilder.bill_added(
            bill_id=bill_id,
            name=name,
            value=value,
            due_date=due_date,
        ))

    def log_bill_edited(self, bill_id: str, changes: dict[str, Any]) -> None:
        """Log an edit. `changes` maps field name to [old, new]."""
        self.log(AuditEventBuilder.bill_edited(bill_id=bill_id, changes=changes))

    def log_bill_deleted(self, bill_id: str, name: str) -> None:
        self.log(AuditEventBuilder.bill_deleted(bill_id=bill_id, name=name))

    def log_payment_toggled(self, bill_id: str, paid: bool) -> None:
        self.log(AuditEventBuilder.payment_toggled(bill_id=bill_id, paid=paid))

    def log_ledger_loaded(self, storage_key: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(
            storage_key=storage_key,
            record_count=record_count,
        ))

    def log_storage_read_failed(self, storage_key: str, error_message: str) -> None:
        """Log an unreadable storage slot."""
        self.log(AuditEventBuilder.storage_read_failed(
            storage_key=storage_key,
            error_message=error_message,
        ))

    def log_record_skipped(
        self,
        position: int,
        error_message: str,
        bill_id: Optional[str] = None,
    ) -> None:
        """Log a stored bill that failed validation on load."""
        self.log(AuditEventBuilder.record_skipped(
            position=position,
            error_message=error_message,
            bill_id=bill_id,
        ))

    def log_save_failed(self, storage_key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(
            storage_key=storage_key,
            error_message=error_message,
        ))
