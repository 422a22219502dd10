"""Chart rendering for the monthly summary and insights pages."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.ticker import FuncFormatter  # noqa: E402

from .burndown import BurndownSeries  # noqa: E402


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def format_vnd(amount: float) -> str:
    """Format a whole VND amount the vi-VN way, e.g. ``1.234.567 ₫``."""

    return f"{round(amount):,}".replace(",", ".") + " ₫"


def build_burndown_chart(series: BurndownSeries) -> Figure:
    """Line chart of cumulative actual spend against the expected straight line.

    Days with no known actual value are left as gaps instead of dropping to zero.
    """

    fig, ax = plt.subplots(figsize=(10, 5))
    labels = series.labels

    actual = [float("nan") if value is None else value for value in series.actual]
    ax.plot(labels, actual, label="Actual", color="#0d6efd", linewidth=2, marker="o", markersize=3)
    ax.plot(
        labels,
        series.expected,
        label="Expected",
        color="#6c757d",
        linewidth=1.5,
        linestyle="--",
    )

    ax.set_xlim(1, series.days_in_month)
    ax.set_xlabel("Day of month")
    ax.set_ylabel("Cumulative spend")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: format_vnd(v)))
    ax.set_title(
        f"Daily budget burndown {series.year}-{series.month:02d}",
        fontsize=14,
        fontweight="bold",
    )
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")

    plt.tight_layout()
    return fig


def build_distribution_chart(slices: Sequence[tuple[str, int, str]]) -> Figure:
    """Donut chart of spend per daily-budget category, using each category's colour."""

    fig, ax = plt.subplots(figsize=(8, 6))

    if slices:
        labels = [category for category, _, _ in slices]
        sizes = [total for _, total, _ in slices]
        colors = [color for _, _, color in slices]
        grand_total = sum(sizes)

        wedges, _texts, autotexts = ax.pie(
            sizes,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=colors,
            pctdistance=0.78,
        )
        for autotext in autotexts:
            autotext.set_fontsize(9)
            autotext.set_fontweight("bold")
            autotext.set_color("white")

        ax.text(0, 0.08, "Daily spending", ha="center", va="center", fontsize=11, color="#666")
        ax.text(
            0,
            -0.08,
            format_vnd(grand_total),
            ha="center",
            va="center",
            fontsize=16,
            fontweight="bold",
            color="#1F2937",
        )
        ax.legend(
            wedges,
            [f"{label}: {format_vnd(size)}" for label, size in zip(labels, sizes)],
            title="Categories",
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
        )
        ax.axis("equal")
        ax.set_title("Spending by Category", fontsize=14, fontweight="bold")
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()
    return fig


def _write_figure(fig: Figure, output_path: Path, renderer: ReportRenderer | None) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if renderer is not None:
            renderer.render(fig, output_path=output_path)
        else:
            fig.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    return output_path


def export_burndown_png(
    *,
    series: BurndownSeries,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the burndown chart to PNG and return the path."""

    return _write_figure(build_burndown_chart(series), output_path, renderer)


def export_distribution_png(
    *,
    slices: Sequence[tuple[str, int, str]],
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the spending distribution donut to PNG and return the path."""

    return _write_figure(build_distribution_chart(slices), output_path, renderer)
