"""Form input validation package."""

from bill_tracker.validation.validator import BillValidator

__all__ = ["BillValidator"]
