"""Expense repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.expense import Expense


class ExpenseRepository(Protocol):
    """Repository for managing expense rows."""

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Retrieve an expense by ID."""
        ...

    def list_for_month(self, year: int, month: int) -> list[Expense]:
        """Get every expense dated inside the calendar month."""
        ...

    def filter_by_date_range(self, start_date: date, end_date: date) -> list[Expense]:
        """Get expenses within a half-open ``[start_date, end_date)`` range."""
        ...

    def create(self, expense: Expense) -> Expense:
        """Create a new expense."""
        ...

    def update(self, expense: Expense) -> Optional[Expense]:
        """Replace the fields of an existing expense in place; ``None`` if unknown."""
        ...

    def delete(self, expense_id: int) -> bool:
        """Delete an expense by ID, returning whether a row matched."""
        ...
