"""Repository protocols for the domain layer."""

from .debt import DebtRepository

__all__ = ["DebtRepository"]
