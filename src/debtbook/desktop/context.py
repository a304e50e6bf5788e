"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..domain.repositories import DebtRepository
from ..infra.repositories import SQLModelDebtRepository
from ..logging_config import get_logger
from ..services.month_view import step_month
from ..services.store import DebtStore

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Application state owned by the top-level window."""

    config: BaseConfig
    session_factory: SessionFactory
    debt_repo: DebtRepository
    store: DebtStore

    # UI state
    theme_mode: ft.ThemeMode
    current_month: date
    editing_id: Optional[str] = None

    page: Optional[ft.Page] = None
    file_picker: Optional[ft.FilePicker] = None
    dev_mode: bool = False

    def shift_month(self, step: int) -> date:
        """Move the month cursor and return the new value."""

        self.current_month = step_month(self.current_month, step)
        return self.current_month


def create_app_context(config: Optional[BaseConfig] = None, *, today: Optional[date] = None) -> AppContext:
    """Open storage, load the saved debts and build the context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    debt_repo = SQLModelDebtRepository(session_factory)
    store = DebtStore(debt_repo.load_all(), on_change=debt_repo.save_all)
    logger.info("Application context ready", extra={"debts": len(store)})

    return AppContext(
        config=config,
        dev_mode=config.DEV_MODE,
        session_factory=session_factory,
        debt_repo=debt_repo,
        store=store,
        theme_mode=ft.ThemeMode.LIGHT,
        current_month=today or date.today(),
    )
