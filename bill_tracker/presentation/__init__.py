"""Presentation helpers shared by the UI."""

from bill_tracker.presentation.formatting import (
    current_month_key,
    format_currency,
    format_date,
    initials,
    month_key,
    month_options,
    parse_month_key,
    status_label,
)

__all__ = [
    "current_month_key",
    "format_currency",
    "format_date",
    "initials",
    "month_key",
    "month_options",
    "parse_month_key",
    "status_label",
]
