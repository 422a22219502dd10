"""Static dashboard pages blueprint package."""

from __future__ import annotations

from flask import Blueprint, Flask

bp = Blueprint("site", __name__)


def init_app(app: Flask) -> None:
    """Register the plain-text catch-all 404."""

    @app.errorhandler(404)
    @app.errorhandler(405)
    def _not_found(error):
        return "404, not found!", 404, {"Content-Type": "text/plain; charset=utf-8"}


from . import routes  # noqa: E402,F401 - ensure routes register

__all__ = ["bp", "init_app"]
