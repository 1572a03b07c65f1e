"""Month query package."""

from bill_tracker.queries.month import MonthView, compute_month_totals, validate_month

__all__ = ["MonthView", "compute_month_totals", "validate_month"]
