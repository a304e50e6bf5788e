"""SQLModel implementation of the debt repository."""

from __future__ import annotations

from datetime import timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ...domain.debt import Debt
from ...logging_config import get_logger
from ...models.debt import DebtRow
from ..database import SessionFactory

logger = get_logger(__name__)


def _to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def debt_to_row(debt: Debt, *, position: int) -> DebtRow:
    """Map a domain record onto a table row."""

    created_at = debt.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    created_at = created_at.astimezone(timezone.utc)
    return DebtRow(
        id=debt.id,
        position=position,
        name=debt.name,
        amount_cents=_to_cents(debt.amount),
        installments=debt.installments,
        current_installment=debt.current_installment,
        due_date=debt.due_date,
        is_recurring=debt.is_recurring,
        is_paid=debt.is_paid,
        created_at=created_at,
    )


def row_to_debt(row: DebtRow) -> Debt:
    """Map a table row back onto a domain record."""

    if row.amount_cents is None or row.amount_cents < 0:
        raise ValueError(f"Invalid stored amount for debt {row.id}: {row.amount_cents!r}")
    if row.due_date is None:
        raise ValueError(f"Missing due date for debt {row.id}")
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Debt(
        id=row.id,
        name=row.name,
        amount=Decimal(row.amount_cents).scaleb(-2),
        installments=max(int(row.installments or 1), 1),
        current_installment=row.current_installment,
        due_date=row.due_date,
        is_recurring=bool(row.is_recurring),
        is_paid=bool(row.is_paid),
        created_at=created_at,
    )


class SQLModelDebtRepository:
    """Stores the debt list in a single table, rewritten wholesale on save."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def load_all(self) -> list[Debt]:
        """Load every record in list order.

        Unreadable storage yields an empty list; individual malformed rows are
        skipped. Both cases are logged rather than raised.
        """
        try:
            with self.session_factory() as session:
                rows = list(session.exec(select(DebtRow).order_by(DebtRow.position)).all())
        except SQLAlchemyError as exc:
            logger.warning("Could not read saved debts; starting empty", extra={"error": str(exc)})
            return []

        debts: list[Debt] = []
        for row in rows:
            try:
                debts.append(row_to_debt(row))
            except (TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed debt row", extra={"row_id": row.id, "error": str(exc)})
        logger.info("Debts loaded", extra={"count": len(debts)})
        return debts

    def save_all(self, records: Iterable[Debt]) -> None:
        """Replace the stored list with ``records`` in one transaction."""
        rows = [debt_to_row(debt, position=index) for index, debt in enumerate(records)]
        with self.session_factory() as session:
            for stale in session.exec(select(DebtRow)).all():
                session.delete(stale)
            # Deletes must reach the database before re-inserting the same ids
            session.flush()
            session.add_all(rows)
        logger.info("Debts saved", extra={"count": len(rows)})

    def count(self) -> int:
        with self.session_factory() as session:
            return len(session.exec(select(DebtRow.id)).all())


__all__ = ["SQLModelDebtRepository", "debt_to_row", "row_to_debt"]
