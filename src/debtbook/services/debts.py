"""Turn validated debt forms into records and apply them to the store."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from ..domain.debt import Debt, utcnow
from ..logging_config import get_logger
from .forms import DebtForm
from .installments import IdFactory, generate_installments, new_debt_id
from .store import DebtStore

logger = get_logger(__name__)


class FormValidationError(ValueError):
    """Raised when a form that failed validation is submitted."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = {key: list(messages) for key, messages in errors.items()}
        summary = "; ".join(f"{key}: {' '.join(msgs)}" for key, msgs in self.errors.items())
        super().__init__(f"Invalid debt form ({summary})")


def build_debts_from_form(
    form: DebtForm,
    *,
    editing: Optional[Debt] = None,
    now: Optional[datetime] = None,
    id_factory: Optional[IdFactory] = None,
) -> list[Debt]:
    """Build the records a submission produces.

    * Editing: a single replacement keeping the edited record's id, creation
      time, paid flag and series position. The series is never regenerated,
      so the installment count of the edited record is kept as well.
    * New entry with more than one installment: the generated series.
    * Otherwise: one standalone record.
    """

    if form.errors or form.amount is None or form.due_date is None or form.installments is None:
        raise FormValidationError(form.errors or {"form": ["Form has not been validated."]})

    if editing is not None:
        return [
            editing.evolve(
                name=form.name,
                amount=form.amount,
                due_date=form.due_date,
                is_recurring=form.is_recurring if editing.current_installment is None else False,
            )
        ]

    if form.installments > 1:
        return generate_installments(
            name=form.name,
            amount=form.amount,
            start_date=form.due_date,
            total=form.installments,
            now=now,
            id_factory=id_factory,
        )

    make_id = id_factory or (lambda _index: new_debt_id())
    return [
        Debt(
            id=make_id(0),
            name=form.name,
            amount=form.amount,
            installments=1,
            current_installment=None,
            due_date=form.due_date,
            is_recurring=form.is_recurring,
            is_paid=False,
            created_at=now or utcnow(),
        )
    ]


def submit_debt_form(
    store: DebtStore,
    form: DebtForm,
    *,
    editing_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[Debt]:
    """Validate ``form`` and apply it to ``store``.

    When ``editing_id`` names a record that no longer exists the submission
    is dropped and an empty list returned.
    """

    if not form.validate():
        raise FormValidationError(form.errors)

    if editing_id is not None:
        editing = store.get(editing_id)
        if editing is None:
            logger.info("Edited debt no longer exists", extra={"debt_id": editing_id})
            return []
        records = build_debts_from_form(form, editing=editing, now=now)
        store.replace(editing_id, records[0])
        return records

    records = build_debts_from_form(form, now=now)
    store.add(records)
    logger.info(
        "Debt submitted",
        extra={"records": len(records), "installments": form.installments},
    )
    return records


__all__ = ["FormValidationError", "build_debts_from_form", "submit_debt_form"]
