"""SQLite persistence tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlmodel import select

from debtbook.config import BaseConfig
from debtbook.desktop.context import create_app_context
from debtbook.infra.database import bootstrap_database
from debtbook.infra.repositories import SQLModelDebtRepository
from debtbook.infra.repositories.debt import debt_to_row
from debtbook.models.debt import DebtRow
from debtbook.services.backup import loads_debts
from debtbook.services.store import DebtStore


def test_empty_database_loads_empty_list(debt_repo):
    assert debt_repo.load_all() == []


def test_round_trip_reproduces_records(debt_repo, sample_debts):
    debt_repo.save_all(sample_debts)

    assert debt_repo.load_all() == sample_debts


def test_round_trip_keeps_field_values(debt_repo, debt_factory):
    created = datetime(2024, 3, 1, 23, 59, 58, 123456, tzinfo=timezone.utc)
    debt = debt_factory(
        "Loan",
        "1234.56",
        date(2024, 12, 31),
        installments=12,
        current_installment=12,
        is_paid=True,
        created_at=created,
    )
    debt_repo.save_all([debt])

    (loaded,) = debt_repo.load_all()

    assert loaded.amount == Decimal("1234.56")
    assert loaded.due_date == date(2024, 12, 31)
    assert loaded.created_at == created
    assert loaded.created_at.tzinfo is not None
    assert loaded.current_installment == 12
    assert loaded.is_paid is True


def test_non_utc_timestamps_survive_as_same_instant(debt_repo, debt_factory):
    local = datetime(2024, 3, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
    debt_repo.save_all([debt_factory(created_at=local)])

    (loaded,) = debt_repo.load_all()

    assert loaded.created_at == local


def test_save_all_overwrites_wholesale(debt_repo, debt_factory):
    a, b, c = debt_factory("A"), debt_factory("B"), debt_factory("C")
    debt_repo.save_all([a, b, c])

    debt_repo.save_all([c.evolve(is_paid=True), a])

    loaded = debt_repo.load_all()
    assert [d.name for d in loaded] == ["C", "A"]
    assert loaded[0].is_paid is True
    assert debt_repo.count() == 2


def test_store_persists_after_each_mutation(debt_repo, debt_factory):
    store = DebtStore(debt_repo.load_all(), on_change=debt_repo.save_all)
    debt = debt_factory()

    store.add(debt)
    assert debt_repo.load_all() == [debt]

    store.set_paid(debt.id, True)
    assert debt_repo.load_all()[0].is_paid is True

    store.remove(debt.id)
    assert debt_repo.load_all() == []


def test_malformed_rows_are_skipped(debt_repo, session_factory, debt_factory):
    good = debt_factory("Good")
    debt_repo.save_all([good])
    with session_factory() as session:
        session.add(
            DebtRow(
                id="broken",
                position=1,
                name="Broken",
                amount_cents=-100,
                due_date=date(2024, 1, 1),
                created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
        )

    assert debt_repo.load_all() == [good]


def test_unreadable_storage_loads_empty(tmp_path):
    from debtbook.infra.database import create_session_factory
    from sqlmodel import create_engine

    # No tables were created in this database
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    repo = SQLModelDebtRepository(create_session_factory(engine))

    assert repo.load_all() == []


def test_bootstrap_quarantines_corrupt_database(isolated_data_dir):
    config = BaseConfig()
    db_path = config.database_path
    db_path.write_bytes(b"this is definitely not a sqlite database" * 64)

    engine, session_factory = bootstrap_database(config)

    assert SQLModelDebtRepository(session_factory).load_all() == []
    assert list(isolated_data_dir.glob("debtbook.db.corrupt-*"))
    engine.dispose()


def test_app_context_loads_saved_debts(debt_factory):
    ctx = create_app_context(today=date(2024, 3, 1))
    debt = debt_factory()
    ctx.store.add(debt)

    reopened = create_app_context()

    assert reopened.store.records == [debt]
    assert ctx.current_month == date(2024, 3, 1)


def test_rows_keep_positions(debt_repo, session_factory, debt_factory):
    debt_repo.save_all([debt_factory("A"), debt_factory("B")])

    with session_factory() as session:
        rows = session.exec(select(DebtRow).order_by(DebtRow.position)).all()

    assert [(r.position, r.name) for r in rows] == [(0, "A"), (1, "B")]


def test_rows_carry_aware_utc_timestamps(debt_factory):
    local = datetime(2024, 3, 1, 21, 30, tzinfo=timezone(timedelta(hours=-3)))

    row = debt_to_row(debt_factory(created_at=local), position=0)

    assert row.created_at.tzinfo is not None
    assert row.created_at.utcoffset() == timedelta(0)
    assert row.created_at == datetime(2024, 3, 2, 0, 30, tzinfo=timezone.utc)


def test_imported_sub_cent_amount_survives_reload(debt_repo):
    imported = loads_debts('[{"id": "1", "name": "Water", "amount": 10.005, "dueDate": "2024-03-01"}]')
    store = DebtStore(on_change=debt_repo.save_all)
    store.reset(imported)

    reloaded = debt_repo.load_all()

    assert reloaded == store.records
    assert reloaded[0].amount == Decimal("10.01")
