"""
Centralized category and budget definitions shared by the API and the reports.
Budgets are whole VND amounts; the currency has no fractional subunit.
"""

# Expense categories offered by the entry form, in display order
EXPENSE_CATEGORIES = [
    "Food",
    "Baby",
    "Medical/Utility",
    "Home",
    "Transportation",
    "Entertainment",
    "Gift",
    "Other",
]

# Filter sentinel meaning "every category"
ALL_CATEGORIES = "All"

# Fixed monthly budget per category
MONTHLY_BUDGET = {
    "Food": 5_000_000,
    "Medical/Utility": 2_000_000,
    "Transportation": 1_000_000,
    "Entertainment": 1_500_000,
    "Home": 2_000_000,
    "Baby": 15_000_000,
}

TOTAL_BUDGET = 20_000_000

# Lump charges paid near the start of the month; excluded from the burndown
START_OF_MONTH_CATEGORIES = ["Home", "Baby"]

CATEGORY_COLORS = {
    "Food": "#FF6384",
    "Medical/Utility": "#4BC0C0",
    "Home": "#FFCE56",
    "Transportation": "#36A2EB",
    "Entertainment": "#9966FF",
    "Baby": "#FF9F40",
    "Gift": "#C9CBCF",
    "Other": "#808080",
}

DEFAULT_CATEGORY_COLOR = "#808080"

DEFAULT_ALLOWED_ORIGINS = (
    "https://expensetracker.hgnlab.org",
    "http://localhost:8787",
    "http://127.0.0.1:8787",
    "http://localhost:8788",
    "http://127.0.0.1:8788",
)


def get_category_options(include_all: bool = False) -> list[str]:
    """
    Get the category names used by the entry form and the list filter.

    Args:
        include_all: If True, includes the "All" sentinel at the beginning

    Returns:
        List of category name strings
    """
    options = []
    if include_all:
        options.append(ALL_CATEGORIES)
    options.extend(EXPENSE_CATEGORIES)
    return options


def category_color(category_name: str) -> str:
    """Return the chart colour for a category, grey when unknown."""
    return CATEGORY_COLORS.get(category_name, DEFAULT_CATEGORY_COLOR)
