"""SQLModel implementation of the Expense repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.expense import Expense


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the half-open ``[first day, first day of next month)`` range."""

    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


class SQLModelExpenseRepository:
    """SQLModel-based expense repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Retrieve an expense by ID."""
        with self.session_factory() as session:
            obj = session.exec(select(Expense).where(Expense.id == expense_id)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_for_month(self, year: int, month: int) -> list[Expense]:
        """Get every expense dated inside the calendar month, in row order."""
        start_date, end_date = month_bounds(year, month)
        return self.filter_by_date_range(start_date, end_date)

    def filter_by_date_range(self, start_date: date, end_date: date) -> list[Expense]:
        """Get expenses within ``[start_date, end_date)``."""
        with self.session_factory() as session:
            statement = (
                select(Expense)
                .where(Expense.date >= start_date)
                .where(Expense.date < end_date)  # Exclusive end boundary
                .order_by(Expense.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, expense: Expense) -> Expense:
        """Create a new expense."""
        with self.session_factory() as session:
            expense.id = None
            session.add(expense)
            session.commit()
            session.refresh(expense)
            session.expunge(expense)
            return expense

    def update(self, expense: Expense) -> Optional[Expense]:
        """Replace an existing expense in place; ``None`` when the id is unknown."""
        with self.session_factory() as session:
            existing = session.get(Expense, expense.id)
            if existing is None:
                return None
            existing.date = expense.date
            existing.amount = expense.amount
            existing.description = expense.description
            existing.category = expense.category
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing

    def delete(self, expense_id: int) -> bool:
        """Delete an expense by ID, returning whether a row matched."""
        with self.session_factory() as session:
            expense = session.get(Expense, expense_id)
            if expense is None:
                return False
            session.delete(expense)
            session.commit()
            return True
