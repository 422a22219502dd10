"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .constants.categories import DEFAULT_ALLOWED_ORIGINS, TOTAL_BUDGET

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Split a comma separated environment variable into a tuple of values."""

    value = os.getenv(name)
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "ExpenseTracker"
    DB_FILENAME = "expensetracker.db"
    DEFAULT_LANDING_ROUTE = "/expense"
    STATIC_ROUTES = ("/expense", "/summary", "/insights")

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("EXPENSETRACKER_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("EXPENSETRACKER_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("EXPENSETRACKER_DATABASE_URL", self._build_sqlite_url())
        self.ALLOWED_ORIGINS = _env_list("EXPENSETRACKER_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
        self.TOTAL_BUDGET = _env_int("EXPENSETRACKER_TOTAL_BUDGET", TOTAL_BUDGET)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("EXPENSETRACKER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("EXPENSETRACKER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG = False
    TESTING = True
