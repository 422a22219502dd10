"""Daily spending burndown for a single month."""

from __future__ import annotations

from calendar import monthrange
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..domain.records import ExpenseRecord
from .budgeting import BudgetConfiguration


@dataclass(frozen=True, slots=True)
class BurndownSeries:
    """Cumulative actual spend against a straight-line expected spend.

    ``actual`` holds ``None`` for days that have not happened yet in the
    current month, so "unknown" stays distinct from a true zero.
    """

    year: int
    month: int
    days_in_month: int
    daily_budget: int
    actual: list[Optional[int]]
    expected: list[float]

    @property
    def labels(self) -> list[int]:
        return list(range(1, self.days_in_month + 1))

    @property
    def last_known_actual(self) -> Optional[int]:
        known = [value for value in self.actual if value is not None]
        return known[-1] if known else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "days_in_month": self.days_in_month,
            "daily_budget": self.daily_budget,
            "labels": self.labels,
            "actual": list(self.actual),
            "expected": list(self.expected),
        }


def days_in_month(year: int, month: int) -> int:
    """Gregorian day count for the month, leap years included."""

    return monthrange(year, month)[1]


def daily_totals(
    records: Iterable[ExpenseRecord],
    config: BudgetConfiguration,
    *,
    year: int,
    month: int,
) -> list[int]:
    """Bucket daily-budget spend by day of month (index 0 is day 1).

    Records from another month are skipped rather than treated as errors.
    """

    tracked = set(config.daily_categories)
    totals = [0] * days_in_month(year, month)
    for record in records:
        if record.category not in tracked:
            continue
        if record.date.year != year or record.date.month != month:
            continue
        totals[record.date.day - 1] += record.amount
    return totals


def project_burndown(
    records: Iterable[ExpenseRecord],
    config: BudgetConfiguration,
    *,
    year: int,
    month: int,
    today: date,
) -> BurndownSeries:
    """Build the actual vs expected cumulative series for ``year``/``month``.

    ``today`` must be supplied by the caller; days after it are left as
    ``None`` only when the requested month is today's month.
    """

    day_count = days_in_month(year, month)
    daily_budget = config.daily_budget
    totals = daily_totals(records, config, year=year, month=month)

    is_current_month = (today.year, today.month) == (year, month)
    running = 0
    actual: list[Optional[int]] = []
    for day, amount in enumerate(totals, start=1):
        running += amount
        if is_current_month and day > today.day:
            actual.append(None)
        else:
            actual.append(running)

    daily_rate = daily_budget / day_count
    expected = [daily_rate * day for day in range(1, day_count + 1)]

    return BurndownSeries(
        year=year,
        month=month,
        days_in_month=day_count,
        daily_budget=daily_budget,
        actual=actual,
        expected=expected,
    )
