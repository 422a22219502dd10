"""Flask CLI commands for ExpenseTracker."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click
from sqlmodel import select

DEMO_EXPENSES = [
    (1, 15_000_000, "Daycare", "Baby"),
    (1, 2_200_000, "Rent share", "Home"),
    (2, 350_000, "Groceries", "Food"),
    (3, 120_000, "Taxi", "Transportation"),
    (5, 450_000, "Electricity", "Medical/Utility"),
    (6, 250_000, "Lunch", "Food"),
    (8, 300_000, "Cinema", "Entertainment"),
    (12, 500_000, "Birthday present", "Gift"),
    (14, 180_000, "Fuel", "Transportation"),
    (20, 90_000, "Stationery", "Other"),
]


def parse_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into ``(year, month)``."""

    try:
        year_raw, month_raw = value.split("-", 1)
        year, month = int(year_raw), int(month_raw)
    except ValueError as exc:
        raise click.BadParameter("Expected YYYY-MM", param_hint="--month") from exc
    if not 1 <= month <= 12:
        raise click.BadParameter("Month must be between 01 and 12", param_hint="--month")
    return year, month


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("expense-seed")
    @click.option("--month", "month_value", default=None, help="Month to seed as YYYY-MM")
    def expense_seed(month_value: str | None) -> None:
        """Insert a demo month of expenses."""

        from .extensions import session_scope
        from .models import Expense

        today = date.today()
        year, month = parse_month(month_value) if month_value else (today.year, today.month)

        with session_scope() as session:
            for day, amount, description, category in DEMO_EXPENSES:
                session.add(
                    Expense(
                        date=date(year, month, day),
                        amount=amount,
                        description=description,
                        category=category,
                    )
                )
        click.echo(f"Seeded {len(DEMO_EXPENSES)} expenses for {year}-{month:02d}.")

    @app.cli.command("expense-report")
    @click.option("--month", "month_value", required=True, help="Month to report as YYYY-MM")
    @click.option(
        "--chart",
        "chart_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write the burndown chart PNG here",
    )
    def expense_report(month_value: str, chart_path: Path | None) -> None:
        """Print the monthly budget summary."""

        from .extensions import expense_repository
        from .services.budgeting import summarize_month
        from .services.burndown import project_burndown
        from .services.dashboard import RepositoryExpenseSource
        from .services.reports import export_burndown_png, format_vnd

        year, month = parse_month(month_value)
        budget = app.extensions["expensetracker"]["budget"]
        records = RepositoryExpenseSource(expense_repository()).fetch_month(year, month)
        summary = summarize_month(records, budget)

        click.echo(f"Expenses for {year}-{month:02d}: {len(records)}")
        click.echo(
            f"Total: {format_vnd(summary.total_spent)} / "
            f"{format_vnd(summary.total_budget)} ({summary.total_percentage}%)"
        )
        click.echo(
            f"Daily: {format_vnd(summary.daily_spent)} / "
            f"{format_vnd(summary.daily_budget)} ({summary.daily_percentage}%)"
        )
        for item in summary.start_of_month + summary.budgeted:
            click.echo(
                f"  {item.category}: {format_vnd(item.total)} / "
                f"{format_vnd(item.budget)} ({item.percentage}%, {item.color})"
            )
        for category, total in summary.other_spending:
            click.echo(f"  {category}: {format_vnd(total)} (unbudgeted)")

        if chart_path is not None:
            series = project_burndown(records, budget, year=year, month=month, today=date.today())
            written = export_burndown_png(series=series, output_path=chart_path)
            click.echo(f"Chart written: {written}")

    @app.cli.command("expense-export")
    @click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
    def expense_export(output: Path) -> None:
        """Export every expense to CSV."""

        from .extensions import session_scope
        from .models import Expense
        from .services.export_csv import export_expenses_csv

        with session_scope() as session:
            rows = session.exec(select(Expense).order_by(Expense.date, Expense.id)).all()
            records = [row.to_record() for row in rows]

        path = export_expenses_csv(expenses=records, output_path=output)
        click.echo(f"Exported {len(records)} expenses to {path}")
