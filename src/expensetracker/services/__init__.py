"""Service module exports."""

from . import (
    budgeting,
    burndown,
    dashboard,
    export_csv,
    input_normalizer,
    ledger_service,
    reports,
)

__all__ = [
    "budgeting",
    "burndown",
    "dashboard",
    "input_normalizer",
    "ledger_service",
    "reports",
    "export_csv",
]
