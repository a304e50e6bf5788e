"""Debt form definition and validation helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from ..domain.debt import Debt, quantize_amount

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class DebtForm:
    """Raw debt form input plus the typed values produced by :meth:`validate`.

    ``raw_data`` keeps the strings exactly as typed; ``name``, ``amount``,
    ``installments``, ``due_date`` and ``is_recurring`` hold parsed values and
    are only trustworthy after ``validate()`` returned True.
    """

    name: str = ""
    amount: Optional[Decimal] = None
    installments: Optional[int] = None
    due_date: Optional[date] = None
    is_recurring: bool = False
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)
    raw_data: Dict[str, str] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DebtForm:
        """Create a form populated from dialog field values."""

        form = cls()
        form.load(data)
        return form

    @classmethod
    def from_debt(cls, debt: Debt) -> DebtForm:
        """Pre-fill a form for editing an existing record."""

        return cls.from_mapping(
            {
                "name": debt.name,
                "amount": debt.amount,
                "installments": debt.installments,
                "due_date": debt.due_date,
                "is_recurring": debt.is_recurring,
            }
        )

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming values to the form state."""

        self.raw_data = {}
        for key in ("name", "amount", "installments", "due_date"):
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, date):
                value_str = value.isoformat()
            else:
                value_str = str(value)
            self.raw_data[key] = value_str
        if not self.raw_data["installments"].strip():
            self.raw_data["installments"] = "1"

        recurring = data.get("is_recurring", False)
        if isinstance(recurring, str):
            self.is_recurring = recurring.strip().lower() in _TRUE_VALUES
        else:
            self.is_recurring = bool(recurring)
        self.name = self.raw_data["name"].strip()

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        self.name = self.raw_data.get("name", "").strip()
        if not self.name:
            self._error("name", "Enter a name for the debt.")

        self.amount = self._parse_amount(self.raw_data.get("amount", ""))
        self.installments = self._parse_installments(self.raw_data.get("installments", ""))
        self.due_date = self._parse_due_date(self.raw_data.get("due_date", ""))

        return not self.errors

    def _error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def _parse_amount(self, raw: str) -> Optional[Decimal]:
        text = raw.strip().replace(",", ".")
        if not text:
            self._error("amount", "This field is required.")
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            self._error("amount", "Enter a valid number.")
            return None
        if not value.is_finite():
            self._error("amount", "Enter a valid number.")
            return None
        if value < 0:
            self._error("amount", "Amount must be at least zero.")
            return None
        return quantize_amount(value)

    def _parse_installments(self, raw: str) -> Optional[int]:
        text = raw.strip()
        try:
            value = int(text)
        except ValueError:
            self._error("installments", "Enter a whole number of installments.")
            return None
        if value < 1:
            self._error("installments", "There must be at least one installment.")
            return None
        return value

    def _parse_due_date(self, raw: str) -> Optional[date]:
        text = raw.strip()
        if not text:
            self._error("due_date", "This field is required.")
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            self._error("due_date", "Use the YYYY-MM-DD format.")
            return None

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages


__all__ = ["DebtForm"]
