from __future__ import annotations

import pytest
from flask import g

from expensetracker import create_app
from expensetracker.config import BaseConfig, DevConfig, TestConfig
from expensetracker.constants.categories import DEFAULT_ALLOWED_ORIGINS, TOTAL_BUDGET


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPENSETRACKER_DATA_DIR", str(tmp_path))
    for name in (
        "EXPENSETRACKER_DATABASE_URL",
        "EXPENSETRACKER_SECRET_KEY",
        "EXPENSETRACKER_DEV_MODE",
        "EXPENSETRACKER_ALLOWED_ORIGINS",
        "EXPENSETRACKER_TOTAL_BUDGET",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DATABASE_URL.endswith("expensetracker.db")
    assert config.ALLOWED_ORIGINS == DEFAULT_ALLOWED_ORIGINS
    assert config.TOTAL_BUDGET == TOTAL_BUDGET
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_total_budget_override(monkeypatch):
    monkeypatch.setenv("EXPENSETRACKER_TOTAL_BUDGET", "25000000")

    assert BaseConfig().TOTAL_BUDGET == 25_000_000


def test_total_budget_must_be_numeric(monkeypatch):
    monkeypatch.setenv("EXPENSETRACKER_TOTAL_BUDGET", "lots")

    with pytest.raises(ValueError, match="EXPENSETRACKER_TOTAL_BUDGET"):
        BaseConfig()


def test_production_requires_secret_key(monkeypatch):
    monkeypatch.setenv("EXPENSETRACKER_DEV_MODE", "false")

    with pytest.raises(ValueError):
        BaseConfig()

    monkeypatch.setenv("EXPENSETRACKER_SECRET_KEY", "s3cret")
    assert BaseConfig().DEV_MODE is False


def test_config_map():
    assert DevConfig.DEBUG is True
    assert TestConfig.TESTING is True


def test_app_uses_configured_total_budget(monkeypatch):
    monkeypatch.setenv("EXPENSETRACKER_TOTAL_BUDGET", "40000000")

    app = create_app("testing")

    assert app.extensions["expensetracker"]["budget"].total_budget == 40_000_000
    assert app.config["TESTING"] is True


def test_app_holds_no_request_scoped_session():
    app = create_app("testing")

    hooks = [func.__name__ for func in app.before_request_funcs.get(None, [])]
    assert hooks == ["_answer_preflight"]
    assert app.teardown_appcontext_funcs == []

    with app.test_client() as client:
        client.get("/api/expense?year=2025&month=8")
        assert "sqlmodel_session" not in g
