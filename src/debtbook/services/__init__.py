"""Business services for DebtBook."""

from .debts import FormValidationError, build_debts_from_form, submit_debt_form
from .forms import DebtForm
from .installments import add_months, generate_installments
from .month_view import is_due_this_month, is_overdue, step_month, total_due_this_month
from .store import DebtStore

__all__ = [
    "DebtForm",
    "DebtStore",
    "FormValidationError",
    "add_months",
    "build_debts_from_form",
    "generate_installments",
    "is_due_this_month",
    "is_overdue",
    "step_month",
    "submit_debt_form",
    "total_due_this_month",
]
