"""Persisted debt rows."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class DebtRow(SQLModel, table=True):
    """One stored debt record; the table always mirrors the full in-memory list."""

    __tablename__: ClassVar[str] = "debt"

    id: str = Field(primary_key=True, max_length=64)
    position: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False)
    amount_cents: int = Field(nullable=False)
    installments: int = Field(default=1, nullable=False)
    current_installment: Optional[int] = Field(default=None)
    due_date: date = Field(nullable=False, index=True)
    is_recurring: bool = Field(default=False, nullable=False)
    is_paid: bool = Field(default=False, nullable=False)
    # Written as aware UTC; older SQLite dialects hand it back naive on load.
    created_at: datetime = Field(nullable=False)
