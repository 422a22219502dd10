"""JSON API blueprint package."""

from __future__ import annotations

from flask import Blueprint, Flask

bp = Blueprint("api", __name__, url_prefix="/api")


def init_app(app: Flask) -> None:
    """Attach the budget configuration and CORS handling to the application."""

    from ...services.budgeting import BudgetConfiguration
    from . import cors

    state = app.extensions.setdefault("expensetracker", {})
    state["budget"] = BudgetConfiguration.default(total_budget=app.config.get("TOTAL_BUDGET"))
    cors.init_app(app)


from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp", "init_app"]
