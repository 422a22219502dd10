"""Concrete repository implementations using SQLModel."""

from .expense import SQLModelExpenseRepository, month_bounds

__all__ = [
    "SQLModelExpenseRepository",
    "month_bounds",
]
