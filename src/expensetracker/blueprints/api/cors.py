"""Origin allow-listing for the JSON API."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Flask, Response, current_app, request

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def cors_headers(origin: str | None, allowed_origins: Iterable[str]) -> dict[str, str]:
    """Return the CORS headers for ``origin``.

    Disallowed (or absent) origins get a literal ``"null"`` origin rather than
    no header at all.
    """

    if origin and origin in tuple(allowed_origins):
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        }
    return {"Access-Control-Allow-Origin": "null"}


def _request_cors_headers() -> dict[str, str]:
    return cors_headers(request.headers.get("Origin"), current_app.config.get("ALLOWED_ORIGINS", ()))


def init_app(app: Flask) -> None:
    """Answer preflight requests and stamp CORS headers on ``/api/*`` responses."""

    @app.before_request
    def _answer_preflight() -> Response | None:
        if request.method != "OPTIONS":
            return None
        return Response(status=204, headers=_request_cors_headers())

    @app.after_request
    def _stamp_api_headers(response: Response) -> Response:
        if request.path.startswith("/api/") and request.method != "OPTIONS":
            response.headers.update(_request_cors_headers())
        return response
