"""Debt repository protocol."""

from __future__ import annotations

from typing import Iterable, Protocol

from ..debt import Debt


class DebtRepository(Protocol):
    """Durable storage for the full debt list."""

    def load_all(self) -> list[Debt]:
        """Load every stored record in insertion order; empty when nothing is stored."""
        ...

    def save_all(self, records: Iterable[Debt]) -> None:
        """Overwrite storage with exactly ``records``."""
        ...
