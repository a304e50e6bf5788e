"""Month-scoped projections over the debt list."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..domain.debt import CENT, Debt
from .installments import add_months

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

STATUS_PAID = "paid"
STATUS_OVERDUE = "overdue"
STATUS_OPEN = "open"


def is_due_this_month(record: Debt, month_cursor: date) -> bool:
    """True when the record falls in the cursor's calendar month and year."""

    return (
        record.due_date.year == month_cursor.year
        and record.due_date.month == month_cursor.month
    )


def is_overdue(record: Debt, *, today: Optional[date] = None) -> bool:
    """True for unpaid records due strictly before ``today``."""

    if record.is_paid:
        return False
    return record.due_date < (today or date.today())


def debts_for_month(records: Iterable[Debt], month_cursor: date) -> list[Debt]:
    return [record for record in records if is_due_this_month(record, month_cursor)]


def total_due_this_month(records: Iterable[Debt], month_cursor: date) -> Decimal:
    """Sum unpaid amounts due in the cursor month."""

    total = sum(
        (
            record.amount
            for record in records
            if not record.is_paid and is_due_this_month(record, month_cursor)
        ),
        Decimal("0"),
    )
    return total.quantize(CENT)


def step_month(cursor: date, step: int) -> date:
    """Move the cursor ``step`` months forward (negative for back)."""

    return add_months(cursor, step)


def month_label(cursor: date) -> str:
    return f"{MONTH_NAMES[cursor.month - 1]} {cursor.year}"


def debt_status(record: Debt, *, today: Optional[date] = None) -> str:
    if record.is_paid:
        return STATUS_PAID
    if is_overdue(record, today=today):
        return STATUS_OVERDUE
    return STATUS_OPEN


def installment_label(record: Debt) -> str | None:
    """Return "2 of 6" style position text, or None outside a series."""

    if record.current_installment is None:
        return None
    return f"{record.current_installment} of {record.installments}"


@dataclass(slots=True)
class MonthSummary:
    """Everything the month view renders for one cursor position."""

    label: str
    records: list[Debt]
    total_due: Decimal
    paid_count: int
    overdue_count: int

    @property
    def is_empty(self) -> bool:
        return not self.records


def summarize_month(
    records: Iterable[Debt], month_cursor: date, *, today: Optional[date] = None
) -> MonthSummary:
    """Project the store onto one calendar month."""

    in_month = debts_for_month(records, month_cursor)
    return MonthSummary(
        label=month_label(month_cursor),
        records=in_month,
        total_due=total_due_this_month(in_month, month_cursor),
        paid_count=sum(1 for record in in_month if record.is_paid),
        overdue_count=sum(1 for record in in_month if is_overdue(record, today=today)),
    )


__all__ = [
    "MonthSummary",
    "STATUS_OPEN",
    "STATUS_OVERDUE",
    "STATUS_PAID",
    "debt_status",
    "debts_for_month",
    "installment_label",
    "is_due_this_month",
    "is_overdue",
    "month_label",
    "step_month",
    "summarize_month",
    "total_due_this_month",
]
