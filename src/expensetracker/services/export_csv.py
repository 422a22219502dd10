"""CSV export helpers for the expense tracker."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Iterable

from ..domain.records import ExpenseRecord

HEADERS = ["id", "date", "amount", "description", "category"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_expenses_csv(*, expenses: Iterable[ExpenseRecord], output_path: Path) -> Path:
    """Write expenses to CSV at `output_path`.

    Columns are deterministic: id, date, amount, description, category.
    Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for expense in expenses:
            writer.writerow(
                {name: _serialize_value(getattr(expense, name, None)) for name in HEADERS}
            )

    return output_path
