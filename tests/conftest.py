"""Pytest configuration and shared fixtures for ExpenseTracker tests.

This module provides database fixtures, record factories, and a Flask app
wired to a throwaway SQLite file so tests never touch the real data directory.
"""

from __future__ import annotations

import tempfile
from datetime import date
from itertools import count
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from expensetracker import create_app
from expensetracker.domain.records import ExpenseRecord
from expensetracker.models import Expense  # noqa: F401  # register table metadata

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect (Callable[[], Session])."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def record_factory():
    """Factory for in-memory expense records with sequential ids.

    Returns:
        Callable: Function that builds ExpenseRecord instances
    """
    ids = count(1)

    def _create_record(
        day: date | str,
        amount: int,
        category: str = "Food",
        description: str = "Test expense",
        expense_id: int | None = None,
    ) -> ExpenseRecord:
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return ExpenseRecord(
            id=next(ids) if expense_id is None else expense_id,
            date=day,
            amount=amount,
            description=description,
            category=category,
        )

    return _create_record


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "expenses.db"
    monkeypatch.setenv("EXPENSETRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("EXPENSETRACKER_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.delenv("EXPENSETRACKER_ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("EXPENSETRACKER_TOTAL_BUDGET", raising=False)
    app = create_app("development")
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
