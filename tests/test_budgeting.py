"""Tests for the monthly budget aggregation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from expensetracker.services.budgeting import (
    BudgetConfiguration,
    BudgetConfigurationError,
    guarded_percent_of,
    percent_of,
    progress_bar_color,
    round_half_up,
    spending_distribution,
    summarize_month,
)


@pytest.fixture
def config() -> BudgetConfiguration:
    return BudgetConfiguration.default()


@pytest.fixture
def august_records(record_factory):
    return [
        record_factory("2025-08-09", 3_000_000, "Food"),
        record_factory("2025-08-08", 500_000, "Transportation"),
        record_factory("2025-08-09", 3_000_000, "Food"),
        record_factory("2025-08-09", 1_200_000, "Entertainment"),
        record_factory("2025-08-08", 2_200_000, "Home"),
        record_factory("2025-08-09", 100_000, "Other"),
    ]


def test_summary_matches_household_example(august_records, config):
    summary = summarize_month(august_records, config)

    assert summary.total_spent == 10_000_000
    assert summary.total_percentage == 50
    assert summary.total_color == "success"

    assert summary.daily_spent == 7_700_000
    assert summary.daily_budget == 9_500_000
    assert summary.daily_percentage == 81
    assert summary.daily_color == "warning"

    home = next(item for item in summary.start_of_month if item.category == "Home")
    assert (home.total, home.budget, home.percentage, home.color) == (
        2_200_000,
        2_000_000,
        110,
        "danger",
    )


def test_per_category_totals_keep_first_encounter_order(august_records, config):
    summary = summarize_month(august_records, config)

    assert list(summary.per_category_total) == [
        "Food",
        "Transportation",
        "Entertainment",
        "Home",
        "Other",
    ]
    assert summary.per_category_total["Food"] == 6_000_000
    assert "Baby" not in summary.per_category_total


def test_start_of_month_bars_follow_display_order(august_records, config):
    summary = summarize_month(august_records, config)

    assert [item.category for item in summary.start_of_month] == ["Baby", "Home"]
    baby = summary.start_of_month[0]
    assert baby.total == 0
    assert baby.percentage == 0


def test_budgeted_bars_follow_budget_mapping_order(august_records, config):
    summary = summarize_month(august_records, config)

    assert [item.category for item in summary.budgeted] == [
        "Food",
        "Medical/Utility",
        "Transportation",
        "Entertainment",
    ]
    food = summary.budgeted[0]
    assert food.percentage == 120
    assert food.color == "danger"


def test_daily_budget_sums_non_start_of_month_budgets(config):
    assert config.daily_categories == ["Food", "Medical/Utility", "Transportation", "Entertainment"]
    assert config.daily_budget == 9_500_000


def test_other_spending_sorted_descending_and_stable(record_factory, config):
    records = [
        record_factory("2025-08-01", 100, "Gift"),
        record_factory("2025-08-02", 300, "Other"),
        record_factory("2025-08-03", 100, "Pets"),
        record_factory("2025-08-04", 50, "Food"),
    ]

    summary = summarize_month(records, config)

    assert summary.other_spending == [("Other", 300), ("Gift", 100), ("Pets", 100)]


def test_empty_month_is_all_zero(config):
    summary = summarize_month([], config)

    assert summary.total_spent == 0
    assert summary.total_percentage == 0
    assert summary.daily_percentage == 0
    assert summary.per_category_total == {}
    assert summary.other_spending == []
    assert all(item.percentage == 0 for item in summary.budgeted)


def test_zero_total_budget_reports_zero_percent(record_factory):
    config = BudgetConfiguration.default(total_budget=0)
    summary = summarize_month([record_factory("2025-08-01", 5_000, "Food")], config)

    assert summary.total_spent == 5_000
    assert summary.total_percentage == 0
    assert summary.total_color == "success"


def test_zero_daily_budget_reports_zero_percent(record_factory):
    config = BudgetConfiguration(
        monthly_budget={"Home": 1_000},
        total_budget=1_000,
        start_of_month_categories=("Home",),
    )
    summary = summarize_month([record_factory("2025-08-01", 500, "Food")], config)

    assert summary.daily_budget == 0
    assert summary.daily_spent == 0
    assert summary.daily_percentage == 0


@pytest.mark.parametrize(
    "percentage, expected",
    [
        (0, "success"),
        (75, "success"),
        (76, "warning"),
        (100, "warning"),
        (101, "danger"),
    ],
)
def test_progress_bar_color_boundaries(percentage, expected):
    assert progress_bar_color(percentage) == expected


def test_percentages_round_half_up():
    assert round_half_up(Decimal("80.5")) == 81
    assert round_half_up(Decimal("2.5")) == 3
    assert percent_of(1, 8) == 13  # 12.5
    assert percent_of(7_700_000, 9_500_000) == 81


def test_guarded_percent_of_zero_budget():
    assert guarded_percent_of(1_000, 0) == 0
    with pytest.raises(ZeroDivisionError):
        percent_of(1_000, 0)


def test_start_of_month_category_must_be_budgeted():
    with pytest.raises(BudgetConfigurationError):
        BudgetConfiguration(
            monthly_budget={"Food": 100},
            total_budget=100,
            start_of_month_categories=("Rent",),
        )


def test_daily_categories_need_positive_budget():
    with pytest.raises(BudgetConfigurationError, match="Food"):
        BudgetConfiguration(monthly_budget={"Food": 0}, total_budget=100)


def test_total_budget_override(config):
    override = BudgetConfiguration.default(total_budget=40_000_000)

    assert override.total_budget == 40_000_000
    assert override.monthly_budget == config.monthly_budget


def test_summary_to_dict_shape(august_records, config):
    payload = summarize_month(august_records, config).to_dict()

    assert payload["total"] == {
        "spent": 10_000_000,
        "budget": 20_000_000,
        "percentage": 50,
        "color": "success",
    }
    assert payload["daily"]["color"] == "warning"
    assert payload["other_spending"] == [{"category": "Other", "total": 100_000}]
    assert payload["start_of_month"][1]["category"] == "Home"


def test_spending_distribution_only_daily_categories_with_spend(august_records, config):
    summary = summarize_month(august_records, config)

    slices = spending_distribution(summary, config)

    assert [(category, total) for category, total, _ in slices] == [
        ("Food", 6_000_000),
        ("Transportation", 500_000),
        ("Entertainment", 1_200_000),
    ]
    assert slices[0][2] == "#FF6384"
