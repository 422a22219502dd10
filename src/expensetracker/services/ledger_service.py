"""Ledger-specific helpers for filtering and date-grouped display."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import groupby
from typing import Optional

from ..constants.categories import ALL_CATEGORIES
from ..domain.records import ExpenseRecord


@dataclass(frozen=True, slots=True)
class DateGroup:
    """All records sharing one calendar date, in their input order."""

    date: str
    records: tuple[ExpenseRecord, ...]

    @property
    def total(self) -> int:
        return sum(record.amount for record in self.records)


def normalize_category_value(raw_value: Optional[str]) -> Optional[str]:
    """Return the category to filter on, treating falsy/'All' as no filter."""

    if raw_value is None:
        return None
    value = raw_value.strip()
    if not value or value.lower() == ALL_CATEGORIES.lower():
        return None
    return value


def filter_by_category(
    records: Sequence[ExpenseRecord], category: Optional[str]
) -> list[ExpenseRecord]:
    """Return the records in ``category``; the input sequence is never mutated."""

    selected = normalize_category_value(category)
    if selected is None:
        return list(records)
    return [record for record in records if record.category == selected]


def group_by_date(records: Iterable[ExpenseRecord]) -> Iterator[DateGroup]:
    """Lazily yield date groups, newest date first.

    The sort is stable, so records on the same date keep their input order.
    """

    ordered = sorted(records, key=lambda record: record.date, reverse=True)
    for date_key, items in groupby(ordered, key=lambda record: record.date_key):
        yield DateGroup(date=date_key, records=tuple(items))


def display_groups(
    records: Sequence[ExpenseRecord], category: Optional[str] = ALL_CATEGORIES
) -> Iterator[DateGroup]:
    """Filter by category, then group by date for the expense list."""

    return group_by_date(filter_by_category(records, category))


def find_record(records: Iterable[ExpenseRecord], expense_id: int) -> Optional[ExpenseRecord]:
    """Locate a loaded record by id, as the modify/delete dialogs do."""

    return next((record for record in records if record.id == expense_id), None)
