# medcare/services/billing_math.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable

ZERO = Decimal("0")
Q2 = Decimal("0.01")


def D(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    try:
        return Decimal(str(x if x is not None else 0))
    except (InvalidOperation, ValueError):
        return ZERO


def money2(x) -> Decimal:
    """Two-place money. Every amount a ledger stores passes through here."""
    return D(x).quantize(Q2, rounding=ROUND_HALF_UP)


def line_amount(qty, unit_price) -> Decimal:
    return D(qty) * D(unit_price)


def sum_money(values: Iterable) -> Decimal:
    return sum((D(v) for v in values), ZERO)
