"""Static asset routes for the browser dashboard."""

from __future__ import annotations

from pathlib import Path

from flask import current_app, redirect, send_from_directory

from . import bp

_PACKAGE_STATIC = Path(__file__).resolve().parents[2] / "static"


def _static_dir() -> Path:
    configured = current_app.config.get("EXPENSETRACKER_STATIC_DIR")
    if configured:
        return Path(configured)
    return _PACKAGE_STATIC


@bp.get("/")
def landing():
    """Send visitors to the default dashboard page."""

    return redirect(current_app.config.get("DEFAULT_LANDING_ROUTE", "/expense"), code=302)


@bp.get("/<path:filename>")
def asset(filename: str):
    """Serve a static asset; bare page routes map to their ``index.html``."""

    if f"/{filename}" in current_app.config.get("STATIC_ROUTES", ()):
        filename = f"{filename}/index.html"
    # send_from_directory raises NotFound for missing files and path traversal.
    return send_from_directory(_static_dir(), filename)
