"""SQLModel table exports."""

from .expense import Expense

__all__ = [
    "Expense",
]
