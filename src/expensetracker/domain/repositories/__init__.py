"""Repository protocols (interfaces) for domain entities."""

from .expense import ExpenseRepository

__all__ = ["ExpenseRepository"]
