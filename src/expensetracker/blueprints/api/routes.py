"""JSON API routes: expense CRUD plus the computed monthly summary."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from ...extensions import expense_repository
from ...services.budgeting import BudgetConfiguration, spending_distribution, summarize_month
from ...services.burndown import project_burndown
from . import bp
from .forms import ISO_DATE, ExpenseForm, parse_expense_id

MIN_YEAR = 1
MAX_YEAR = 9998


class _BadRequest(ValueError):
    pass


def _error(code: str, message: str, status: int, **extra):
    payload = {"error": code, "message": message}
    payload.update(extra)
    return jsonify(payload), status


def _budget() -> BudgetConfiguration:
    return current_app.extensions["expensetracker"]["budget"]


def _year_month_args() -> tuple[int, int]:
    year_raw = request.args.get("year")
    month_raw = request.args.get("month")
    if not year_raw or not month_raw:
        raise _BadRequest("Missing required query parameters: year, month")
    try:
        year = int(year_raw)
        month = int(month_raw)
    except ValueError as exc:
        raise _BadRequest("Query parameters year and month must be numeric") from exc
    # date() needs the first day of the following month too
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise _BadRequest(f"Query parameter year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise _BadRequest("Query parameter month must be between 1 and 12")
    return year, month


def _server_error(action: str, exc: Exception):
    current_app.logger.exception("Failed to %s expense", action)
    return _error("server_error", f"An error occurred: {exc}", 500)


@bp.get("/expense")
def list_expenses():
    """Return every expense in the requested month."""

    try:
        year, month = _year_month_args()
    except _BadRequest as exc:
        return _error("bad_request", str(exc), 400)

    try:
        rows = expense_repository().list_for_month(year, month)
    except SQLAlchemyError as exc:
        return _server_error("fetch", exc)

    return jsonify([row.to_record().to_dict() for row in rows])


@bp.post("/expense")
def create_expense():
    """Persist a new expense from a JSON body."""

    form = ExpenseForm.from_mapping(request.get_json(silent=True))
    if not form.validate():
        return _error("invalid_payload", form.message, 400, fields=form.errors)

    try:
        created = expense_repository().create(form.to_model())
    except SQLAlchemyError as exc:
        return _server_error("create", exc)

    current_app.logger.info("Expense %s created", created.id)
    return jsonify({"message": "Expense added successfully", "id": created.id}), 201


@bp.put("/expense")
def update_expense():
    """Replace an existing expense in place."""

    form = ExpenseForm.from_mapping(request.get_json(silent=True), require_id=True)
    if not form.validate():
        return _error("invalid_payload", form.message, 400, fields=form.errors)

    try:
        updated = expense_repository().update(form.to_model())
    except SQLAlchemyError as exc:
        return _server_error("update", exc)

    if updated is None:
        return _error("not_found", "Failed to update expense or not found", 404, id=form.expense_id)
    current_app.logger.info("Expense %s updated", updated.id)
    return jsonify({"message": "Expense updated successfully", "id": updated.id})


@bp.delete("/expense")
def delete_expense():
    """Delete an expense identified by the ``id`` in the JSON body."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, Mapping):
        payload = {}
    raw_id = payload.get("id")
    if raw_id in (None, "", 0):
        return _error("bad_request", "Missing required field: id", 400)
    expense_id = parse_expense_id(raw_id)
    if expense_id is None:
        return _error("bad_request", "Expense id must be a whole number.", 400)

    try:
        deleted = expense_repository().delete(expense_id)
    except SQLAlchemyError as exc:
        return _server_error("delete", exc)

    if not deleted:
        return _error("not_found", "Failed to delete expense or not found", 404, id=expense_id)
    current_app.logger.info("Expense %s deleted", expense_id)
    return jsonify({"message": "Expense deleted successfully", "id": expense_id})


@bp.get("/summary")
def month_summary():
    """Return the budget summary, burndown and pie slices for one month.

    ``today`` may be passed as ``YYYY-MM-DD``; the server date is used otherwise.
    """

    try:
        year, month = _year_month_args()
    except _BadRequest as exc:
        return _error("bad_request", str(exc), 400)

    today_raw = request.args.get("today")
    try:
        if today_raw and not ISO_DATE.fullmatch(today_raw):
            raise ValueError(today_raw)
        today = date.fromisoformat(today_raw) if today_raw else date.today()
    except ValueError:
        return _error("bad_request", "Query parameter today must be YYYY-MM-DD", 400)

    try:
        records = [row.to_record() for row in expense_repository().list_for_month(year, month)]
    except SQLAlchemyError as exc:
        return _server_error("summarize", exc)

    budget = _budget()
    summary = summarize_month(records, budget)
    burndown = project_burndown(records, budget, year=year, month=month, today=today)
    distribution = [
        {"category": category, "total": total, "color": color}
        for category, total, color in spending_distribution(summary, budget)
    ]
    return jsonify(
        {
            "summary": summary.to_dict(),
            "burndown": burndown.to_dict(),
            "distribution": distribution,
        }
    )
