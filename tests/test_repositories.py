"""Tests for the SQLModel expense repository."""

from __future__ import annotations

from datetime import date

import pytest

from expensetracker.infra.repositories import SQLModelExpenseRepository, month_bounds
from expensetracker.models import Expense


@pytest.fixture
def repo(session_factory):
    return SQLModelExpenseRepository(session_factory)


def _expense(day: date, amount: int = 1_000, category: str = "Food", description: str = "x"):
    return Expense(date=day, amount=amount, description=description, category=category)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2025, 8, (date(2025, 8, 1), date(2025, 9, 1))),
        (2025, 12, (date(2025, 12, 1), date(2026, 1, 1))),
        (2024, 2, (date(2024, 2, 1), date(2024, 3, 1))),
    ],
)
def test_month_bounds_half_open(year, month, expected):
    assert month_bounds(year, month) == expected


def test_create_assigns_id(repo):
    created = repo.create(_expense(date(2025, 8, 9)))

    assert created.id is not None
    fetched = repo.get_by_id(created.id)
    assert fetched is not None
    assert fetched.to_record().amount == 1_000


def test_create_ignores_client_supplied_id(repo):
    first = repo.create(_expense(date(2025, 8, 9)))
    clash = _expense(date(2025, 8, 10))
    clash.id = first.id

    second = repo.create(clash)

    assert second.id != first.id


def test_list_for_month_uses_inclusive_start_exclusive_end(repo):
    inside_first = repo.create(_expense(date(2025, 8, 1)))
    inside_last = repo.create(_expense(date(2025, 8, 31)))
    repo.create(_expense(date(2025, 9, 1)))
    repo.create(_expense(date(2025, 7, 31)))

    rows = repo.list_for_month(2025, 8)

    assert [row.id for row in rows] == [inside_first.id, inside_last.id]


def test_list_for_month_keeps_row_order(repo):
    later = repo.create(_expense(date(2025, 8, 20), description="later"))
    earlier = repo.create(_expense(date(2025, 8, 2), description="earlier"))

    rows = repo.list_for_month(2025, 8)

    assert [row.description for row in rows] == ["later", "earlier"]
    assert [row.id for row in rows] == [later.id, earlier.id]


def test_update_replaces_fields(repo):
    created = repo.create(_expense(date(2025, 8, 9)))

    updated = repo.update(
        Expense(
            id=created.id,
            date=date(2025, 8, 10),
            amount=2_500,
            description="Dinner",
            category="Entertainment",
        )
    )

    assert updated is not None
    record = repo.get_by_id(created.id).to_record()
    assert (record.date, record.amount, record.description, record.category) == (
        date(2025, 8, 10),
        2_500,
        "Dinner",
        "Entertainment",
    )


def test_update_unknown_id_returns_none(repo):
    assert repo.update(Expense(id=404, date=date(2025, 8, 1), amount=1, description="", category="Food")) is None


def test_delete(repo):
    created = repo.create(_expense(date(2025, 8, 9)))

    assert repo.delete(created.id) is True
    assert repo.get_by_id(created.id) is None
    assert repo.delete(created.id) is False


def test_unsaved_expense_cannot_become_record():
    with pytest.raises(ValueError):
        _expense(date(2025, 8, 1)).to_record()
