"""Pytest configuration and shared fixtures for DebtBook tests.

Provides an isolated data directory per test, a throwaway SQLite database,
and factories for debt records.
"""

from __future__ import annotations

import itertools
import logging
import tempfile
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import models so every table is registered with SQLModel metadata
from debtbook import models  # noqa: F401
from debtbook.domain.debt import Debt

FIXED_NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point the app at a per-test data directory and default database."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("DEBTBOOK_DATA_DIR", str(data_dir))
    monkeypatch.delenv("DEBTBOOK_DATABASE_URL", raising=False)
    monkeypatch.setenv("DEBTBOOK_DEV_MODE", "false")
    return data_dir


@pytest.fixture(autouse=True)
def app_log_level(caplog):
    """Run every test with the app loggers at INFO, as setup_logging leaves them."""

    caplog.set_level(logging.INFO, logger="debtbook")
    return caplog


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the repository contract (context-managed sessions)."""

    from debtbook.infra.database import create_session_factory

    return create_session_factory(db_engine)


@pytest.fixture
def debt_repo(session_factory):
    from debtbook.infra.repositories import SQLModelDebtRepository

    return SQLModelDebtRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for debt records with sensible defaults and unique ids.

    Returns:
        Callable: Function that builds Debt instances
    """

    counter = itertools.count(1)

    def _create_debt(
        name: str = "Credit card",
        amount: Decimal | str | int = "100.00",
        due_date: date = date(2024, 3, 15),
        *,
        debt_id: str | None = None,
        installments: int = 1,
        current_installment: int | None = None,
        is_recurring: bool = False,
        is_paid: bool = False,
        created_at: datetime = FIXED_NOW,
    ) -> Debt:
        return Debt(
            id=debt_id or f"debt-{next(counter)}",
            name=name,
            amount=Decimal(str(amount)),
            installments=installments,
            current_installment=current_installment,
            due_date=due_date,
            is_recurring=is_recurring,
            is_paid=is_paid,
            created_at=created_at,
        )

    return _create_debt


@pytest.fixture
def sample_debts(debt_factory):
    """A small mixed list: open, paid, next month, installment and recurring."""

    return [
        debt_factory("Rent", "100.00", date(2024, 3, 1)),
        debt_factory("Phone", "50.00", date(2024, 3, 5), is_paid=True),
        debt_factory("Gym", "30.00", date(2024, 4, 1), is_recurring=True),
        debt_factory(
            "Laptop",
            "250.00",
            date(2024, 3, 20),
            installments=3,
            current_installment=1,
        ),
    ]
