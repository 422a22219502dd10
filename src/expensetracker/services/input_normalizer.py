"""Amount formatting and entry-form state helpers.

Amounts are typed free-form, displayed with ``.`` thousands separators
(``1.234.567``) and submitted as plain integers.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

GROUP_SEPARATOR = "."
REQUIRED_FIELDS = ("date", "amount", "description", "category")

_NON_DIGITS = re.compile(r"\D")
_GROUP_BOUNDARY = re.compile(r"\B(?=(\d{3})+(?!\d))")


class InvalidAmountError(ValueError):
    """Raised when an amount field holds no digits at all."""


def format_amount(value: str | int) -> str:
    """Strip non-digits and insert a separator every three digits from the right."""

    digits = _NON_DIGITS.sub("", str(value))
    return _GROUP_BOUNDARY.sub(GROUP_SEPARATOR, digits)


def digits_only(value: str | int) -> str:
    return _NON_DIGITS.sub("", str(value))


def parse_amount(value: str | int) -> int:
    """Convert a (possibly grouped) amount back into an integer.

    An empty result is a validation failure, never a silent zero.
    """

    digits = digits_only(str(value).replace(GROUP_SEPARATOR, ""))
    if not digits:
        raise InvalidAmountError(f"Amount {value!r} contains no digits.")
    return int(digits)


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def invalid_fields(values: Mapping[str, Any], required: tuple[str, ...] = REQUIRED_FIELDS) -> set[str]:
    """Return the required fields that are missing or whitespace only."""

    return {name for name in required if _is_blank(values.get(name))}


def is_submittable(values: Mapping[str, Any], required: tuple[str, ...] = REQUIRED_FIELDS) -> bool:
    """Mirror of the submit button's enabled state."""

    return not invalid_fields(values, required)


@dataclass
class EntryFormState:
    """Live state of the add/modify expense form.

    ``update`` runs on every keystroke: it formats the amount, clears the
    highlight of a field once it is filled, and keeps ``submit_enabled`` in
    step with the required-field check. ``validate`` is the full pass run on
    submit and marks every blank field.
    """

    values: dict[str, str] = field(default_factory=dict)
    invalid: set[str] = field(default_factory=set)
    submit_enabled: bool = False

    def __post_init__(self) -> None:
        if "amount" in self.values:
            self.values["amount"] = format_amount(self.values["amount"])
        self.submit_enabled = is_submittable(self.values)

    def update(self, name: str, value: str) -> bool:
        if name == "amount":
            value = format_amount(value)
        self.values[name] = value
        if not _is_blank(value):
            self.invalid.discard(name)
        self.submit_enabled = is_submittable(self.values)
        return self.submit_enabled

    def validate(self) -> bool:
        self.invalid = invalid_fields(self.values)
        return not self.invalid

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for the API; raises ``InvalidAmountError`` on bad amounts."""

        return {
            "date": self.values.get("date", "").strip(),
            "amount": parse_amount(self.values.get("amount", "")),
            "description": self.values.get("description", "").strip(),
            "category": self.values.get("category", "").strip(),
        }


@dataclass(frozen=True, slots=True)
class ConfirmationState:
    formatted: str
    confirm_enabled: bool
    show_warning: bool


@dataclass
class DeleteConfirmation:
    """Guard for destructive deletes: the user must re-type the exact amount."""

    expected_amount: int
    state: ConfirmationState = field(init=False)

    def __post_init__(self) -> None:
        self.state = ConfirmationState(formatted="", confirm_enabled=False, show_warning=False)

    def update(self, entered: str) -> ConfirmationState:
        formatted = format_amount(entered)
        matches = formatted.replace(GROUP_SEPARATOR, "") == str(self.expected_amount)
        # No input yet means "disabled" without an error.
        self.state = ConfirmationState(
            formatted=formatted,
            confirm_enabled=matches,
            show_warning=not matches and bool(formatted),
        )
        return self.state
