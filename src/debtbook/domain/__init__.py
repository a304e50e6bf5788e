"""Domain entities and repository interfaces."""

from .debt import Debt

__all__ = ["Debt"]
