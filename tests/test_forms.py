"""Debt form validation tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from debtbook.services.forms import DebtForm


def _form(**overrides):
    data = {
        "name": "  Credit card ",
        "amount": "150.5",
        "installments": "1",
        "due_date": "2024-03-15",
        "is_recurring": False,
    }
    data.update(overrides)
    return DebtForm.from_mapping(data)


def test_valid_form_populates_typed_values():
    form = _form()

    assert form.validate()
    assert form.name == "Credit card"
    assert form.amount == Decimal("150.50")
    assert form.installments == 1
    assert form.due_date == date(2024, 3, 15)
    assert form.is_recurring is False
    assert form.errors == {}


def test_required_fields_report_per_field_errors():
    form = DebtForm.from_mapping({"name": " ", "amount": "", "due_date": ""})

    assert not form.validate()
    assert set(form.errors) == {"name", "amount", "due_date"}
    assert "This field is required." in form.errors["amount"]


def test_installments_default_to_one():
    form = DebtForm.from_mapping({"name": "Gym", "amount": "10", "due_date": "2024-01-01"})

    assert form.validate()
    assert form.installments == 1


def test_negative_amount_rejected():
    form = _form(amount="-1")

    assert not form.validate()
    assert form.errors["amount"] == ["Amount must be at least zero."]


def test_zero_amount_allowed():
    form = _form(amount="0")

    assert form.validate()
    assert form.amount == Decimal("0.00")


def test_amount_accepts_decimal_comma_and_rounds_half_up():
    form = _form(amount="10,005")

    assert form.validate()
    assert form.amount == Decimal("10.01")


def test_non_numeric_amount_rejected():
    form = _form(amount="ten")

    assert not form.validate()
    assert form.errors["amount"] == ["Enter a valid number."]


def test_infinite_amount_rejected():
    form = _form(amount="Infinity")

    assert not form.validate()
    assert "amount" in form.errors


def test_installments_must_be_positive_integer():
    for raw in ("0", "-3", "2.5", "many"):
        form = _form(installments=raw)
        assert not form.validate(), raw
        assert "installments" in form.errors


def test_bad_due_date_rejected():
    form = _form(due_date="15/03/2024")

    assert not form.validate()
    assert form.errors["due_date"] == ["Use the YYYY-MM-DD format."]


def test_recurring_flag_parses_strings():
    assert _form(is_recurring="on").is_recurring is True
    assert _form(is_recurring="false").is_recurring is False
    assert _form(is_recurring=True).is_recurring is True


def test_from_debt_prefills_raw_values(debt_factory):
    debt = debt_factory("Car", "320.40", date(2024, 7, 2), is_recurring=True)
    form = DebtForm.from_debt(debt)

    assert form.raw_data == {
        "name": "Car",
        "amount": "320.40",
        "installments": "1",
        "due_date": "2024-07-02",
    }
    assert form.is_recurring is True
    assert form.validate()


def test_error_messages_flattened():
    form = DebtForm.from_mapping({})
    form.validate()

    assert len(list(form.error_messages)) == 3
