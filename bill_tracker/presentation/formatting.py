"""
Display formatting for the bill list.

pt-BR conventions: amounts as "R$ 1.234,56", dates as "dd/mm/yyyy".
None of these functions touch the ledger; they only turn its values
into text.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from bill_tracker.models.bill import BillRecord, parse_due_date
from bill_tracker.models.money import round2

# pt-BR puts a no-break space between symbol and amount
NBSP = "\u00a0"

PAID_LABEL = "Pago"
PENDING_LABEL = "Pendente"


def format_currency(value: Union[Decimal, float, int, str], symbol: str = "R$") -> str:
    """
    Format an amount the pt-BR way.

    >>> format_currency(Decimal("1234.5"))
    'R$\\xa01.234,50'
    """
    amount = round2(value)
    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.2f}"
    # 1,234.56 -> 1.234,56
    body = body.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol}{NBSP}{body}"


def format_date(value: Union[str, date, None]) -> str:
    """dd/mm/yyyy, or the raw value if it is not a date."""
    if isinstance(value, date):
        parsed = value
    else:
        parsed = parse_due_date(value)
    if parsed is None:
        return value or ""
    return parsed.strftime("%d/%m/%Y")


def initials(text: str) -> str:
    """
    Avatar letters for a bill name.

    One word gives its first two letters, more words give the first
    letter of each of the first two.
    """
    parts = text.strip().split()
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[1][0]).upper()


def status_label(paid: bool) -> str:
    return PAID_LABEL if paid else PENDING_LABEL


def month_key(year: int, month: int) -> str:
    """YYYY-MM, the month selector's value."""
    return f"{year:04d}-{month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """
    Split a YYYY-MM key.

    Raises:
        ValueError: If the key is not a valid year-month
    """
    try:
        year_text, month_text = key.strip().split("-")
        year, month = int(year_text), int(month_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Month must be YYYY-MM: {key!r}")
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValueError(f"Month must be YYYY-MM: {key!r}")
    return year, month


def current_month_key(today: Optional[date] = None) -> str:
    today = today or date.today()
    return month_key(today.year, today.month)


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_options(
    records: Iterable[BillRecord],
    today: Optional[date] = None,
    months_before: int = 12,
    months_after: int = 12,
) -> list[str]:
    """
    Month selector choices: a window around today plus every month
    that has a bill due, oldest first.
    """
    today = today or date.today()
    keys = {
        month_key(*_shift_month(today.year, today.month, offset))
        for offset in range(-months_before, months_after + 1)
    }
    for record in records:
        due = record.due_on
        if due is not None:
            keys.add(month_key(due.year, due.month))
    return sorted(keys)
