"""
Monetary rounding.

Every amount that enters the ledger, and every intermediate sum the ledger
produces, goes through round2(). Amounts are Decimal everywhere, but the
rounding itself is done on the binary float the way a browser rounds
money: nudge by machine epsilon, scale by 100, round half up. That keeps
cents identical to what the stored data was produced with, so
"10.075" (10.07499999... in binary) rounds to 10.07 while 1.005 rounds
to 1.01.
"""

import math
import sys
from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)

Amount = Union[Decimal, float, int, str]


def to_decimal(value: Amount) -> Decimal:
    """
    Convert a user or storage supplied amount to Decimal.

    Raises:
        ValueError: If the value is not a finite number
        TypeError: If the value is of an unsupported type
    """
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid amount")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return result


def _round_half_up(x: float) -> int:
    """Nearest integer, ties toward positive infinity."""
    whole = math.floor(x)
    return whole + 1 if x - whole >= 0.5 else whole


def round2(value: Amount) -> Decimal:
    """
    Round to 2 decimal places.

    >>> round2("19.999")
    Decimal('20.00')
    >>> round2(1.005)
    Decimal('1.01')
    >>> round2("10.075")
    Decimal('10.07')

    Raises:
        ValueError: If the value is not a finite number or is too large
        TypeError: If the value is of an unsupported type
    """
    scaled = (float(to_decimal(value)) + sys.float_info.epsilon) * 100
    if not math.isfinite(scaled):
        raise ValueError(f"Amount out of range: {value!r}")
    return (Decimal(_round_half_up(scaled)) / HUNDRED).quantize(CENT)


def add_rounded(total: Amount, value: Amount) -> Decimal:
    """One accumulation step: round both operands, add, round again."""
    return round2(round2(total) + round2(value))


def sum_rounded(values: Iterable[Amount]) -> Decimal:
    """Sum amounts, rounding after every addition."""
    total = ZERO
    for value in values:
        total = add_rounded(total, value)
    return total
