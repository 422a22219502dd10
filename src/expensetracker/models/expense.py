"""SQLModel definition for the expense table."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..domain.records import ExpenseRecord


class Expense(SQLModel, table=True):
    """A single hand-entered expense."""

    __tablename__: ClassVar[str] = "expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: dt.date = Field(nullable=False, index=True)
    amount: int = Field(nullable=False, description="Whole currency units, never negative")
    description: str = Field(default="", max_length=255)
    category: str = Field(nullable=False, index=True, max_length=64)

    def to_record(self) -> ExpenseRecord:
        """Project the row into the immutable record used by the reporting core."""

        if self.id is None:
            raise ValueError("Expense must be persisted before it can be reported on")
        return ExpenseRecord(
            id=self.id,
            date=self.date,
            amount=int(self.amount),
            description=self.description,
            category=self.category,
        )
