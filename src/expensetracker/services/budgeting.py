"""Budgeting domain services.

Turns one month of expense records into category totals and progress figures
measured against the fixed monthly budgets.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..constants import categories as defaults
from ..domain.records import ExpenseRecord


class BudgetConfigurationError(ValueError):
    """Raised when a budget configuration breaks its invariants."""


@dataclass(frozen=True)
class BudgetConfiguration:
    """Static budget settings shared by the aggregator and the burndown."""

    monthly_budget: Mapping[str, int]
    total_budget: int
    start_of_month_categories: tuple[str, ...] = ()
    category_display_order: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly_budget", dict(self.monthly_budget))
        object.__setattr__(self, "start_of_month_categories", tuple(self.start_of_month_categories))
        object.__setattr__(self, "category_display_order", tuple(self.category_display_order))

        unknown = [c for c in self.start_of_month_categories if c not in self.monthly_budget]
        if unknown:
            raise BudgetConfigurationError(
                f"Start-of-month categories without a budget: {', '.join(unknown)}"
            )
        # Per-category percentages divide by the category's own budget.
        unfunded = [c for c in self.daily_categories if self.monthly_budget[c] <= 0]
        if unfunded:
            raise BudgetConfigurationError(
                f"Daily-budget categories need a positive budget: {', '.join(unfunded)}"
            )

    @classmethod
    def default(cls, *, total_budget: int | None = None) -> BudgetConfiguration:
        """Return the deployed household budget."""

        return cls(
            monthly_budget=defaults.MONTHLY_BUDGET,
            total_budget=defaults.TOTAL_BUDGET if total_budget is None else total_budget,
            start_of_month_categories=tuple(defaults.START_OF_MONTH_CATEGORIES),
            category_display_order=tuple(defaults.EXPENSE_CATEGORIES),
        )

    def _in_display_order(self, names: Iterable[str]) -> list[str]:
        wanted = list(names)
        ordered = [c for c in self.category_display_order if c in wanted]
        ordered.extend(c for c in wanted if c not in ordered)
        return ordered

    @property
    def daily_categories(self) -> list[str]:
        """Budgeted categories tracked against a uniform daily burn rate."""

        return self._in_display_order(
            c for c in self.monthly_budget if c not in self.start_of_month_categories
        )

    @property
    def daily_budget(self) -> int:
        return sum(self.monthly_budget[c] for c in self.daily_categories)

    @property
    def ordered_start_of_month(self) -> list[str]:
        return self._in_display_order(self.start_of_month_categories)

    def is_budgeted(self, category: str) -> bool:
        return category in self.monthly_budget


@dataclass(slots=True)
class CategoryProgress:
    """Spend against budget for a single progress bar."""

    category: str
    total: int
    budget: int
    percentage: int

    @property
    def color(self) -> str:
        return progress_bar_color(self.percentage)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "total": self.total,
            "budget": self.budget,
            "percentage": self.percentage,
            "color": self.color,
        }


@dataclass(slots=True)
class MonthlySummary:
    """Derived totals for one month; recomputed on every fetch."""

    per_category_total: dict[str, int]
    total_spent: int
    total_budget: int
    total_percentage: int
    daily_spent: int
    daily_budget: int
    daily_percentage: int
    start_of_month: list[CategoryProgress] = field(default_factory=list)
    budgeted: list[CategoryProgress] = field(default_factory=list)
    other_spending: list[tuple[str, int]] = field(default_factory=list)

    @property
    def total_color(self) -> str:
        return progress_bar_color(self.total_percentage)

    @property
    def daily_color(self) -> str:
        return progress_bar_color(self.daily_percentage)

    def to_dict(self) -> dict[str, Any]:
        return {
            "per_category_total": dict(self.per_category_total),
            "total": {
                "spent": self.total_spent,
                "budget": self.total_budget,
                "percentage": self.total_percentage,
                "color": self.total_color,
            },
            "daily": {
                "spent": self.daily_spent,
                "budget": self.daily_budget,
                "percentage": self.daily_percentage,
                "color": self.daily_color,
            },
            "start_of_month": [item.to_dict() for item in self.start_of_month],
            "budgeted": [item.to_dict() for item in self.budgeted],
            "other_spending": [
                {"category": category, "total": total} for category, total in self.other_spending
            ],
        }


def progress_bar_color(percentage: float) -> str:
    """Map a percentage to a progress-bar style; both thresholds are exclusive."""

    if percentage > 100:
        return "danger"
    if percentage > 75:
        return "warning"
    return "success"


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with halves going up, like ``Math.round``."""

    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(spent: int, budget: int) -> int:
    """Whole-number percentage of ``budget`` consumed by ``spent``.

    Raises ``ZeroDivisionError`` for a zero budget; see ``guarded_percent_of``.
    """

    return round_half_up(Decimal(spent) * 100 / Decimal(budget))


def guarded_percent_of(spent: int, budget: int) -> int:
    """Like ``percent_of`` but defined as 0 when there is no budget."""

    if budget <= 0:
        return 0
    return percent_of(spent, budget)


def category_totals(records: Iterable[ExpenseRecord]) -> dict[str, int]:
    """Sum amounts per category, keyed in first-encounter order."""

    totals: dict[str, int] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, 0) + record.amount
    return totals


def summarize_month(
    records: Iterable[ExpenseRecord], config: BudgetConfiguration
) -> MonthlySummary:
    """Compose the monthly summary shown on the dashboard."""

    totals = category_totals(records)
    total_spent = sum(totals.values())

    daily_categories = config.daily_categories
    daily_spent = sum(totals.get(c, 0) for c in daily_categories)
    daily_budget = config.daily_budget

    start_of_month = []
    for category in config.ordered_start_of_month:
        budget = config.monthly_budget.get(category, 0)
        total = totals.get(category, 0)
        start_of_month.append(
            CategoryProgress(
                category=category,
                total=total,
                budget=budget,
                percentage=guarded_percent_of(total, budget),
            )
        )

    budgeted = []
    for category, budget in config.monthly_budget.items():
        if category in config.start_of_month_categories:
            continue
        total = totals.get(category, 0)
        budgeted.append(
            CategoryProgress(
                category=category,
                total=total,
                budget=budget,
                percentage=percent_of(total, budget),
            )
        )

    # sorted() is stable, so ties keep their first-encounter order.
    other_spending = sorted(
        ((c, t) for c, t in totals.items() if not config.is_budgeted(c)),
        key=lambda item: item[1],
        reverse=True,
    )

    return MonthlySummary(
        per_category_total=totals,
        total_spent=total_spent,
        total_budget=config.total_budget,
        total_percentage=guarded_percent_of(total_spent, config.total_budget),
        daily_spent=daily_spent,
        daily_budget=daily_budget,
        daily_percentage=guarded_percent_of(daily_spent, daily_budget),
        start_of_month=start_of_month,
        budgeted=budgeted,
        other_spending=other_spending,
    )


def spending_distribution(
    summary: MonthlySummary, config: BudgetConfiguration
) -> list[tuple[str, int, str]]:
    """Return ``(category, total, colour)`` slices for the spending pie chart.

    Only daily-budget categories with positive spend are included, in display order.
    """

    slices = []
    for category in config.daily_categories:
        total = summary.per_category_total.get(category, 0)
        if total > 0:
            slices.append((category, total, defaults.category_color(category)))
    return slices
