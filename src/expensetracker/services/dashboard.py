"""Month dashboard controller.

Glues an expense source to the pure services and pushes the results to
rendering ports. The controller owns the loaded records for one month; nothing
is kept in module globals, so several dashboards can coexist.

Stale fetches are handled with request tokens: every load issues a new token
and a response is only applied when its token is still the latest one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from ..constants.categories import ALL_CATEGORIES
from ..domain.records import ExpenseRecord
from ..domain.repositories.expense import ExpenseRepository
from ..logging_config import get_logger
from ..models.expense import Expense
from .budgeting import BudgetConfiguration, MonthlySummary, spending_distribution, summarize_month
from .burndown import BurndownSeries, project_burndown
from .input_normalizer import DeleteConfirmation, EntryFormState, InvalidAmountError
from .ledger_service import DateGroup, display_groups, find_record, normalize_category_value

logger = get_logger("dashboard")

LOAD_ERROR_MESSAGE = "Error loading data."
LOAD_ALERT_MESSAGE = "Could not load expenses from the server."
BUSY_MESSAGE = "Another change is still being saved."


class ExpenseNotFoundError(LookupError):
    """Raised when an expense id does not match any stored or loaded expense."""


class ExpenseSource(Protocol):
    """Where the dashboard reads and writes expenses."""

    def fetch_month(self, year: int, month: int) -> list[ExpenseRecord]:  # pragma: no cover
        ...

    def create(self, payload: Mapping[str, Any]) -> int:  # pragma: no cover
        ...

    def update(self, expense_id: int, payload: Mapping[str, Any]) -> None:  # pragma: no cover
        ...

    def delete(self, expense_id: int) -> None:  # pragma: no cover
        ...


class SummaryRenderer(Protocol):
    def render_summary(self, summary: MonthlySummary) -> None:  # pragma: no cover
        ...

    def clear(self) -> None:  # pragma: no cover
        ...


class ListRenderer(Protocol):
    def render_list(self, groups: Sequence[DateGroup]) -> None:  # pragma: no cover
        ...

    def render_error(self, message: str) -> None:  # pragma: no cover
        ...


class ChartRenderer(Protocol):
    def render_charts(
        self, distribution: Sequence[tuple[str, int, str]], burndown: BurndownSeries
    ) -> None:  # pragma: no cover
        ...

    def clear(self) -> None:  # pragma: no cover
        ...


class Notifier(Protocol):
    def alert(self, message: str) -> None:  # pragma: no cover
        ...


@dataclass(slots=True)
class MutationResult:
    """Outcome of an add, modify or delete attempt."""

    ok: bool
    invalid: set[str] = field(default_factory=set)
    error: Optional[str] = None


class RepositoryExpenseSource:
    """``ExpenseSource`` backed directly by an ``ExpenseRepository``."""

    def __init__(self, repository: ExpenseRepository):
        self.repository = repository

    def fetch_month(self, year: int, month: int) -> list[ExpenseRecord]:
        return [row.to_record() for row in self.repository.list_for_month(year, month)]

    def create(self, payload: Mapping[str, Any]) -> int:
        created = self.repository.create(_to_model(payload))
        return int(created.id)

    def update(self, expense_id: int, payload: Mapping[str, Any]) -> None:
        updated = self.repository.update(_to_model(payload, expense_id=expense_id))
        if updated is None:
            raise ExpenseNotFoundError(expense_id)

    def delete(self, expense_id: int) -> None:
        if not self.repository.delete(expense_id):
            raise ExpenseNotFoundError(expense_id)


def _to_model(payload: Mapping[str, Any], *, expense_id: Optional[int] = None) -> Expense:
    raw_date = payload["date"]
    return Expense(
        id=expense_id,
        date=raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date)),
        amount=int(payload["amount"]),
        description=str(payload["description"]),
        category=str(payload["category"]),
    )


class MonthDashboard:
    """Controller for the single-month expense dashboard."""

    def __init__(
        self,
        source: ExpenseSource,
        *,
        summary_view: SummaryRenderer,
        list_view: ListRenderer,
        chart_view: ChartRenderer,
        notifier: Notifier,
        config: BudgetConfiguration | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.source = source
        self.summary_view = summary_view
        self.list_view = list_view
        self.chart_view = chart_view
        self.notifier = notifier
        self.config = config or BudgetConfiguration.default()
        self.clock = clock

        self.year: Optional[int] = None
        self.month: Optional[int] = None
        self.records: list[ExpenseRecord] = []
        self.category: str = ALL_CATEGORIES
        self.in_flight = False
        self._latest_token = 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def begin_load(self, year: int, month: int) -> int:
        """Select a month and issue the token its response must carry."""

        self.year, self.month = year, month
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def load(self, year: int, month: int) -> bool:
        """Fetch and render one month; returns False when nothing was applied."""

        token = self.begin_load(year, month)
        try:
            records = self.source.fetch_month(year, month)
        except Exception as exc:
            return self.fail_load(token, exc)
        return self.complete_load(token, records)

    def complete_load(self, token: int, records: Sequence[ExpenseRecord]) -> bool:
        if not self.is_current(token):
            logger.debug("Discarding stale expense response (token %s)", token)
            return False

        self.records = list(records)
        self._render_all()
        return True

    def fail_load(self, token: int, exc: Exception) -> bool:
        if not self.is_current(token):
            logger.debug("Ignoring failure of stale expense request (token %s)", token)
            return False

        logger.error("Failed to fetch expenses for %s-%02d: %s", self.year, self.month, exc)
        # Previously loaded records stay as they were.
        self.list_view.render_error(LOAD_ERROR_MESSAGE)
        self.summary_view.clear()
        self.chart_view.clear()
        self.notifier.alert(LOAD_ALERT_MESSAGE)
        return False

    def refresh(self) -> bool:
        if self.year is None or self.month is None:
            return False
        return self.load(self.year, self.month)

    def _render_all(self) -> None:
        summary = summarize_month(self.records, self.config)
        burndown = project_burndown(
            self.records, self.config, year=self.year, month=self.month, today=self.clock()
        )
        self.summary_view.render_summary(summary)
        self.chart_view.render_charts(spending_distribution(summary, self.config), burndown)
        self._render_list()

    def _render_list(self) -> None:
        self.list_view.render_list(list(display_groups(self.records, self.category)))

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    def apply_filter(self, category: Optional[str]) -> None:
        """Re-render the list for ``category`` without refetching."""

        self.category = normalize_category_value(category) or ALL_CATEGORIES
        self._render_list()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def _loaded(self, expense_id: int) -> ExpenseRecord:
        record = find_record(self.records, expense_id)
        if record is None:
            raise ExpenseNotFoundError(expense_id)
        return record

    def open_editor(self, expense_id: int) -> EntryFormState:
        """Form state pre-filled from a loaded expense."""

        record = self._loaded(expense_id)
        return EntryFormState(
            values={
                "date": record.date_key,
                "amount": str(record.amount),
                "description": record.description,
                "category": record.category,
            }
        )

    def open_delete(self, expense_id: int) -> DeleteConfirmation:
        return DeleteConfirmation(expected_amount=self._loaded(expense_id).amount)

    def submit_new(self, form: EntryFormState) -> MutationResult:
        payload = self._validated_payload(form)
        if isinstance(payload, MutationResult):
            return payload
        return self._mutate(
            "add",
            lambda: self.source.create(payload),
            "Failed to add expense. Please try again.",
        )

    def submit_update(self, expense_id: int, form: EntryFormState) -> MutationResult:
        payload = self._validated_payload(form)
        if isinstance(payload, MutationResult):
            return payload
        return self._mutate(
            "update",
            lambda: self.source.update(expense_id, payload),
            "Error: Could not update the expense on the server.",
        )

    def confirm_delete(self, expense_id: int, confirmation: DeleteConfirmation) -> MutationResult:
        if not confirmation.state.confirm_enabled:
            return MutationResult(ok=False, invalid={"amount"})
        return self._mutate(
            "delete",
            lambda: self.source.delete(expense_id),
            "Error: Could not delete the expense from the server.",
        )

    def _validated_payload(self, form: EntryFormState) -> dict[str, Any] | MutationResult:
        if not form.validate():
            return MutationResult(ok=False, invalid=set(form.invalid))
        try:
            return form.to_payload()
        except InvalidAmountError:
            form.invalid.add("amount")
            return MutationResult(ok=False, invalid={"amount"})

    def _mutate(self, action: str, call: Callable[[], Any], alert_message: str) -> MutationResult:
        if self.in_flight:
            return MutationResult(ok=False, error=BUSY_MESSAGE)

        self.in_flight = True
        try:
            call()
        except Exception as exc:
            logger.error("Failed to %s expense: %s", action, exc)
            self.notifier.alert(alert_message)
            return MutationResult(ok=False, error=str(exc))
        finally:
            self.in_flight = False

        logger.info("Expense %s succeeded; refreshing month", action)
        self.refresh()
        return MutationResult(ok=True)
