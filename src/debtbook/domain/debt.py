"""Debt record entity and its record-array representation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

CENT = Decimal("0.01")

# Serialised key -> attribute name; key order is the on-disk field order.
FIELD_NAMES: dict[str, str] = {
    "id": "id",
    "name": "name",
    "amount": "amount",
    "installments": "installments",
    "currentInstallment": "current_installment",
    "dueDate": "due_date",
    "isRecurring": "is_recurring",
    "isPaid": "is_paid",
    "createdAt": "created_at",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def quantize_amount(value: Decimal) -> Decimal:
    """Round a money value half-up to cents."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; ``Z`` suffixes and naive values are UTC."""

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def parse_flag(value: Any, key: str) -> bool:
    """Read a boolean field; ``"false"``-style strings count as False."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"Invalid {key} flag: {value!r}")


@dataclass(frozen=True, slots=True)
class Debt:
    """A single payment obligation or one installment of a series.

    Records are immutable; edits produce a new instance via :meth:`evolve`.
    """

    id: str
    name: str
    amount: Decimal
    due_date: date
    installments: int = 1
    current_installment: Optional[int] = None
    is_recurring: bool = False
    is_paid: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_installment(self) -> bool:
        return self.current_installment is not None

    def evolve(self, **changes: Any) -> Debt:
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-friendly mapping using the record-array field names.

        ``currentInstallment`` is omitted for non-installment debts.
        """

        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "amount": str(self.amount),
            "installments": self.installments,
        }
        if self.current_installment is not None:
            data["currentInstallment"] = self.current_installment
        data["dueDate"] = self.due_date.isoformat()
        data["isRecurring"] = self.is_recurring
        data["isPaid"] = self.is_paid
        data["createdAt"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Debt:
        """Build a record from a serialised mapping.

        Raises:
            ValueError: when a required field is missing or has the wrong shape.
        """

        missing = [key for key in ("id", "name", "amount", "dueDate") if key not in data]
        if missing:
            raise ValueError(f"Debt record missing fields: {', '.join(missing)}")

        try:
            amount = Decimal(str(data["amount"]))
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"Invalid amount: {data['amount']!r}") from exc
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"Invalid amount: {data['amount']!r}")
        amount = quantize_amount(amount)

        installments = int(data.get("installments") or 1)
        if installments < 1:
            raise ValueError(f"Invalid installment count: {installments}")

        current = data.get("currentInstallment")
        current_installment = int(current) if current not in (None, "") else None
        if current_installment is not None and not 1 <= current_installment <= installments:
            raise ValueError(
                f"Installment position {current_installment} outside 1..{installments}"
            )

        due_raw = data["dueDate"]
        due_date = due_raw if isinstance(due_raw, date) else date.fromisoformat(str(due_raw)[:10])

        created_raw = data.get("createdAt")
        if isinstance(created_raw, datetime):
            created_at = created_raw
        elif created_raw:
            created_at = parse_timestamp(str(created_raw))
        else:
            created_at = utcnow()

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            amount=amount,
            installments=installments,
            current_installment=current_installment,
            due_date=due_date,
            is_recurring=parse_flag(data.get("isRecurring", False), "isRecurring"),
            is_paid=parse_flag(data.get("isPaid", False), "isPaid"),
            created_at=created_at,
        )


__all__ = [
    "CENT",
    "Debt",
    "FIELD_NAMES",
    "parse_flag",
    "parse_timestamp",
    "quantize_amount",
    "utcnow",
]
