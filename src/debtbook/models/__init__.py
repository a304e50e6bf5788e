"""SQLModel table exports."""

from .debt import DebtRow

__all__ = ["DebtRow"]
