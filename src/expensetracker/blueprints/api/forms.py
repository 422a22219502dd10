"""Expense payload validation helpers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ...models.expense import Expense

MISSING_FIELDS_MESSAGE = "Missing required fields"
AMOUNT_TYPE_MESSAGE = "Amount must be an integer"

# Largest value an SQLite INTEGER column can hold
MAX_STORED_INTEGER = 2**63 - 1

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _is_missing(value: Any) -> bool:
    """Falsy values count as missing, so an amount of 0 is rejected too."""

    if isinstance(value, str):
        return not value.strip()
    return not value


@dataclass(slots=True)
class ExpenseForm:
    """Represents a create/update JSON body prior to validation."""

    require_id: bool = False
    expense_id: Optional[int] = None
    date: Optional[date] = None
    amount: Optional[int] = None
    description: str = ""
    category: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Any, *, require_id: bool = False) -> ExpenseForm:
        """Create a form populated from request data; non-object bodies bind as empty."""

        form = cls(require_id=require_id)
        form.load(data if isinstance(data, Mapping) else {})
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        keys = ("id", "date", "amount", "description", "category")
        self.raw_data = {key: data.get(key) for key in keys}

    @property
    def message(self) -> str:
        """Single human-readable summary of the first failure."""

        if any(MISSING_FIELDS_MESSAGE in messages for messages in self.errors.values()):
            return MISSING_FIELDS_MESSAGE
        if AMOUNT_TYPE_MESSAGE in self.errors.get("amount", []):
            return AMOUNT_TYPE_MESSAGE
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return ""

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        required = ("date", "amount", "description", "category")
        if self.require_id:
            required = ("id",) + required
        for key in required:
            if _is_missing(self.raw_data.get(key)):
                self._add_error(key, MISSING_FIELDS_MESSAGE)
        if self.errors:
            return False

        amount_raw = self.raw_data["amount"]
        self.amount = None
        # bool is an int subclass but never a valid amount
        if isinstance(amount_raw, bool) or not isinstance(amount_raw, (int, float)):
            self._add_error("amount", AMOUNT_TYPE_MESSAGE)
        elif isinstance(amount_raw, float) and not amount_raw.is_integer():
            self._add_error("amount", AMOUNT_TYPE_MESSAGE)
        elif amount_raw < 0:
            self._add_error("amount", "Amount cannot be negative.")
        elif amount_raw > MAX_STORED_INTEGER:
            self._add_error("amount", "Amount is too large.")
        else:
            self.amount = int(amount_raw)

        date_raw = str(self.raw_data["date"]).strip()
        self.date = None
        try:
            if not ISO_DATE.fullmatch(date_raw):
                raise ValueError(date_raw)
            self.date = date.fromisoformat(date_raw)
        except ValueError:
            self._add_error("date", "Enter a valid date (YYYY-MM-DD).")

        self.description = str(self.raw_data["description"]).strip()
        if len(self.description) > 255:
            self._add_error("description", "Description must be 255 characters or fewer.")

        self.category = str(self.raw_data["category"]).strip()

        self.expense_id = None
        if self.require_id:
            self.expense_id = parse_expense_id(self.raw_data["id"])
            if self.expense_id is None:
                self._add_error("id", "Expense id must be a whole number.")

        return not self.errors

    def to_model(self) -> Expense:
        """Build an unsaved ``Expense`` from validated data."""

        if self.errors or self.date is None or self.amount is None:
            raise ValueError("Form must validate before it can be converted")
        return Expense(
            id=self.expense_id,
            date=self.date,
            amount=self.amount,
            description=self.description,
            category=self.category,
        )

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)


def parse_expense_id(value: Any) -> Optional[int]:
    """Accept ints and digit strings (the delete dialog posts the id as text)."""

    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and 0 < value <= MAX_STORED_INTEGER:
        return value
    return None
