"""
Month Queries

DESIGN DECISION: Queries are read-only views over the ledger.
A MonthView holds a callable that returns the ledger's current records,
not a copy of them, so iterating the same view after a change shows the
change. Nothing here mutates a record.

Bills whose stored due date does not parse are left out of every month.
"""

from typing import Callable, Iterable, Iterator

from bill_tracker.errors import ValidationError
from bill_tracker.models.bill import BillRecord, MonthTotals, ValidationIssue
from bill_tracker.models.money import ZERO, add_rounded

RecordSource = Callable[[], Iterable[BillRecord]]


def validate_month(year: int, month: int) -> None:
    """
    Check a calendar year/month pair.

    Raises:
        ValidationError: If month is outside 1..12 or year outside 1..9999
    """
    issues = []
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year <= 9999:
        issues.append(ValidationIssue(
            field="year",
            issue_type="out_of_range",
            message=f"Year must be between 1 and 9999: {year!r}",
        ))
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        issues.append(ValidationIssue(
            field="month",
            issue_type="out_of_range",
            message=f"Month must be between 1 and 12: {month!r}",
        ))
    if issues:
        raise ValidationError(issues)


class MonthView:
    """
    Bills due in one calendar month, earliest due date first.

    Lazy and restartable: every iteration reads the source again.
    Bills sharing a due date keep their ledger order (newest first).
    """

    def __init__(self, source: RecordSource, year: int, month: int):
        validate_month(year, month)
        self._source = source
        self.year = year
        self.month = month

    def _matches(self, record: BillRecord) -> bool:
        due = record.due_on
        return due is not None and due.year == self.year and due.month == self.month

    def __iter__(self) -> Iterator[BillRecord]:
        matching = [record for record in self._source() if self._matches(record)]
        matching.sort(key=lambda record: record.due_on)
        yield from matching

    def count(self) -> int:
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        return next(iter(self), None) is None

    def __repr__(self) -> str:
        return f"MonthView(year={self.year}, month={self.month})"


def compute_month_totals(view: MonthView) -> MonthTotals:
    """
    Sum a month view.

    Each running total is re-rounded after every addition, not just once
    at the end, so the displayed totals do not depend on float drift.
    """
    total_all = ZERO
    total_paid = ZERO
    total_pending = ZERO
    count = 0

    for record in view:
        count += 1
        total_all = add_rounded(total_all, record.value)
        if record.paid:
            total_paid = add_rounded(total_paid, record.value)
        else:
            total_pending = add_rounded(total_pending, record.value)

    return MonthTotals(
        year=view.year,
        month=view.month,
        bill_count=count,
        total_all=total_all,
        total_paid=total_paid,
        total_pending=total_pending,
    )
