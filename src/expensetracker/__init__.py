"""ExpenseTracker application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "expensetracker.blueprints.api"
    yield "expensetracker.blueprints.site"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    # Static assets are served by the site blueprint so that bare routes can be rewritten.
    app = Flask(__name__, instance_relative_config=True, static_folder=None)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["EXPENSETRACKER_CONFIG"] = config_obj

    from .logging_config import setup_logging

    setup_logging(config_obj)

    _register_blueprints(app)
    # Imported lazily so model classes can be used without an app.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register every blueprint declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))
        init_hook = getattr(module, "init_app", None)
        if callable(init_hook):
            init_hook(app)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
