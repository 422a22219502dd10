"""Immutable expense records consumed by the reporting core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """A single expense as seen by the aggregation, burndown and filter code."""

    id: int
    date: date
    amount: int
    description: str
    category: str

    @property
    def date_key(self) -> str:
        """ISO ``YYYY-MM-DD`` string used for grouping and display."""
        return self.date.isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date_key,
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
        }
