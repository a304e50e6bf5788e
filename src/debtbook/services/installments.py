"""Installment series generation and calendar month arithmetic."""

from __future__ import annotations

import secrets
import time
from calendar import monthrange
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..domain.debt import Debt, utcnow

IdFactory = Callable[[int], str]


def add_months(start: date, months: int) -> date:
    """Return ``start`` moved by ``months`` calendar months.

    The day of month is kept; when the target month is shorter it is clamped
    to that month's last day (Jan 31 + 1 month -> Feb 28/29).
    """

    month = start.month - 1 + months
    year = start.year + month // 12
    month = month % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return date(year, month, day)


def new_debt_id(index: Optional[int] = None) -> str:
    """Generate an opaque id: millisecond timestamp, optional series index, random token."""

    stamp = str(time.time_ns() // 1_000_000)
    token = secrets.token_hex(3)
    if index is None:
        return f"{stamp}-{token}"
    return f"{stamp}-{index}-{token}"


def generate_installments(
    *,
    name: str,
    amount: Decimal,
    start_date: date,
    total: int,
    now: Optional[datetime] = None,
    id_factory: Optional[IdFactory] = None,
) -> list[Debt]:
    """Expand one entry into ``total`` monthly installment records.

    Installment ``i`` (0-based) is due ``i`` months after ``start_date`` and
    carries the full entered ``amount``; the amount is not split across the
    series. Records start unpaid and non-recurring.
    """

    if total <= 1:
        raise ValueError("An installment series needs more than one installment")

    make_id = id_factory or new_debt_id
    return [
        Debt(
            id=make_id(index),
            name=name,
            amount=amount,
            installments=total,
            current_installment=index + 1,
            due_date=add_months(start_date, index),
            is_recurring=False,
            is_paid=False,
            created_at=now or utcnow(),
        )
        for index in range(total)
    ]


__all__ = ["add_months", "generate_installments", "new_debt_id"]
