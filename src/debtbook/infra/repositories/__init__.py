"""SQLModel repository implementations."""

from .debt import SQLModelDebtRepository

__all__ = ["SQLModelDebtRepository"]
