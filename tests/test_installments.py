"""Installment generator tests."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from debtbook.services.installments import add_months, generate_installments, new_debt_id


def test_add_months_keeps_day_of_month():
    assert add_months(date(2024, 3, 15), 1) == date(2024, 4, 15)
    assert add_months(date(2024, 3, 15), 0) == date(2024, 3, 15)


def test_add_months_crosses_year_boundaries():
    assert add_months(date(2024, 11, 10), 3) == date(2025, 2, 10)
    assert add_months(date(2024, 1, 10), -1) == date(2023, 12, 10)
    assert add_months(date(2024, 1, 10), -13) == date(2022, 12, 10)


def test_add_months_clamps_short_months():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)


@pytest.mark.parametrize("total", [2, 3, 12, 48])
def test_generates_exactly_total_records_with_full_sequence(total):
    records = generate_installments(
        name="TV", amount=Decimal("99.90"), start_date=date(2024, 5, 10), total=total
    )

    assert len(records) == total
    assert [r.current_installment for r in records] == list(range(1, total + 1))
    assert all(r.installments == total for r in records)


def test_due_dates_are_consecutive_months_from_start():
    records = generate_installments(
        name="TV", amount=Decimal("10"), start_date=date(2024, 11, 5), total=4
    )

    assert [r.due_date for r in records] == [
        date(2024, 11, 5),
        date(2024, 12, 5),
        date(2025, 1, 5),
        date(2025, 2, 5),
    ]


def test_month_end_start_stays_anchored_to_start_day():
    records = generate_installments(
        name="Sofa", amount=Decimal("10"), start_date=date(2024, 1, 31), total=4
    )

    # Each date is offset from the anchor, so March returns to the 31st.
    assert [r.due_date for r in records] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]
    assert len({(r.due_date.year, r.due_date.month) for r in records}) == 4


def test_amount_is_not_divided_between_installments():
    records = generate_installments(
        name="Phone", amount=Decimal("1200.00"), start_date=date(2024, 1, 1), total=6
    )

    assert all(r.amount == Decimal("1200.00") for r in records)


def test_generated_records_start_unpaid_and_not_recurring():
    now = datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)
    records = generate_installments(
        name="Course", amount=Decimal("50"), start_date=date(2024, 1, 1), total=3, now=now
    )

    assert not any(r.is_paid for r in records)
    assert not any(r.is_recurring for r in records)
    assert all(r.created_at == now for r in records)
    assert all(r.name == "Course" for r in records)


def test_ids_are_unique_within_a_batch():
    records = generate_installments(
        name="Bike", amount=Decimal("80"), start_date=date(2024, 1, 1), total=24
    )

    assert len({r.id for r in records}) == 24


def test_ids_are_unique_across_batches_created_together():
    first = generate_installments(name="A", amount=Decimal("1"), start_date=date(2024, 1, 1), total=5)
    second = generate_installments(name="B", amount=Decimal("1"), start_date=date(2024, 1, 1), total=5)

    assert not {r.id for r in first} & {r.id for r in second}


def test_custom_id_factory_receives_index():
    records = generate_installments(
        name="Desk",
        amount=Decimal("5"),
        start_date=date(2024, 1, 1),
        total=3,
        id_factory=lambda index: f"desk-{index}",
    )

    assert [r.id for r in records] == ["desk-0", "desk-1", "desk-2"]


@pytest.mark.parametrize("total", [1, 0, -2])
def test_rejects_series_of_one_or_fewer(total):
    with pytest.raises(ValueError):
        generate_installments(name="X", amount=Decimal("1"), start_date=date(2024, 1, 1), total=total)


def test_new_debt_id_embeds_index():
    assert "-7-" in new_debt_id(7)
    assert new_debt_id() != new_debt_id()
