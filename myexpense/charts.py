"""Chart rendering for the analytics view.

Functions take already-aggregated series and return matplotlib figures.
They do no aggregation of their own.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping, Sequence

import matplotlib.style as mplstyle
from matplotlib.figure import Figure

from myexpense.domain.aggregate import MonthlySeries, round_money
from myexpense.domain.export import EXPORT_HEADER, ExportRow
from myexpense.domain.models import CategoryName, Money, Month

INCOME_COLOR = "#2e9d5b"
EXPENSE_COLOR = "#d9534f"


@contextmanager
def themed(theme: str = "light") -> Iterator[None]:
    """Apply the matplotlib style matching the app theme."""
    with mplstyle.context("dark_background" if theme == "dark" else "default"):
        yield


def _empty(fig: Figure, message: str) -> Figure:
    ax = fig.add_subplot()
    ax.text(0.5, 0.5, message, ha="center", va="center")
    ax.set_axis_off()
    return fig


def category_breakdown_figure(
    breakdown: Mapping[CategoryName, Money],
    title: str = "Expenses by category",
    theme: str = "light",
) -> Figure:
    """Doughnut chart of totals per category."""
    with themed(theme):
        fig = Figure(figsize=(6, 6), layout="tight")
        if not breakdown or sum(breakdown.values()) <= 0:
            return _empty(fig, "No expenses recorded")
        labels = list(breakdown)
        values = [round_money(breakdown[label]) for label in labels]
        ax = fig.add_subplot()
        ax.pie(values, labels=None, wedgeprops={"width": 0.4, "linewidth": 0.5}, startangle=90)
        ax.legend(labels, loc="upper center", bbox_to_anchor=(0.5, -0.02), ncols=min(len(labels), 4), frameon=False)
        ax.set_title(title)
        ax.set_aspect("equal")
    return fig


def monthly_comparison_figure(
    series: MonthlySeries,
    title: str = "Income vs expense by month",
    theme: str = "light",
) -> Figure:
    """Grouped bars of income and expense for each month."""
    with themed(theme):
        fig = Figure(figsize=(8, 5), layout="tight")
        if not series.months:
            return _empty(fig, "No transactions recorded")
        ax = fig.add_subplot()
        positions = range(len(series.months))
        width = 0.4
        ax.bar([p - width / 2 for p in positions], series.income, width, label="Income", color=INCOME_COLOR)
        ax.bar([p + width / 2 for p in positions], series.expense, width, label="Expense", color=EXPENSE_COLOR)
        ax.set_xticks(list(positions), series.months)
        ax.set_ylim(bottom=0)
        ax.legend()
        ax.set_title(title)
    return fig


def monthly_trend_figure(
    totals: Mapping[Month, Money],
    title: str = "Monthly totals",
    theme: str = "light",
) -> Figure:
    """Filled line of the combined total per month."""
    with themed(theme):
        fig = Figure(figsize=(8, 4), layout="tight")
        if not totals:
            return _empty(fig, "No transactions recorded")
        months = list(totals)
        values = [round_money(totals[m]) for m in months]
        ax = fig.add_subplot()
        ax.plot(months, values, marker="o", linewidth=2)
        ax.fill_between(months, values, alpha=0.2)
        ax.set_ylim(bottom=0)
        ax.set_title(title)
    return fig


def table_figure(
    rows: Sequence[ExportRow],
    total: Money,
    currency: str = "",
    title: str = "Transactions",
    theme: str = "light",
) -> Figure:
    """Render table rows plus a total line as an image.

    `total` is the unrounded sum of the underlying records; the rows carry
    display-rounded amounts and are not summed here.
    """
    with themed(theme):
        height = max(2.0, 0.35 * (len(rows) + 3))
        fig = Figure(figsize=(8.5, height), layout="tight")
        ax = fig.add_subplot()
        ax.set_axis_off()
        ax.set_title(title)
        if not rows:
            ax.text(0.5, 0.5, "No transactions match the current filters", ha="center", va="center")
            return fig
        cells = [
            [r["date"], r["type"], r["category"], r["description"], f"{currency}{r['amount']:,.2f}"] for r in rows
        ]
        cells.append(["", "", "", "Total", f"{currency}{round_money(total):,.2f}"])
        table = ax.table(cellText=cells, colLabels=EXPORT_HEADER, loc="upper center", cellLoc="left")
        table.auto_set_font_size(False)
        table.set_fontsize(8)
    return fig
