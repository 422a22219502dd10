"""Database and extension wiring for ExpenseTracker."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from flask import Flask
from sqlmodel import Session, SQLModel, create_engine

from . import models  # noqa: F401  # ensure models registered with SQLModel metadata
from .config import BaseConfig
from .infra.repositories import SQLModelExpenseRepository

_engine = None


def init_db(app: Flask) -> None:
    """Initialize the SQLModel engine using configuration from the app."""

    config: BaseConfig = app.config["EXPENSETRACKER_CONFIG"]
    engine_options = app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {})
    engine = create_engine(config.DATABASE_URL, **engine_options)

    global _engine
    _engine = engine

    with engine.begin() as connection:
        SQLModel.metadata.create_all(connection)


def get_engine():
    """Return the initialized SQLModel engine."""

    if _engine is None:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Database engine not initialized")
    return _engine


def session_factory() -> Session:
    """Open a new session on the application engine."""

    return Session(get_engine(), expire_on_commit=False)


def expense_repository() -> SQLModelExpenseRepository:
    """Repository bound to the application engine."""

    return SQLModelExpenseRepository(session_factory)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around operations."""

    session = Session(get_engine(), expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:  # pragma: no cover - re-raised for caller to handle
        session.rollback()
        raise
    finally:
        session.close()
