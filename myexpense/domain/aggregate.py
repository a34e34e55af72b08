"""Pure functions for summary and chart aggregations.

This module contains the functional core for analytics:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Sums accumulate unrounded. Call round_money (or Summary.rounded) only when
presenting a value.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from myexpense.dates import month_key
from myexpense.domain.models import CategoryName, Money, Month, TransactionType
from myexpense.domain.transactions import Transaction

SORT_ORDERS = ("value", "alpha")


@dataclass(frozen=True)
class Summary:
    """Income, expense and balance totals."""

    income: Money
    expense: Money
    balance: Money

    def rounded(self) -> "Summary":
        return Summary(
            income=round_money(self.income),
            expense=round_money(self.expense),
            balance=round_money(self.balance),
        )


@dataclass(frozen=True)
class MonthSplit:
    """Income and expense totals for one month."""

    income: Money
    expense: Money


@dataclass(frozen=True)
class MonthlySeries:
    """Per-month income and expense series aligned to `months`."""

    months: list[Month]
    income: list[Money]
    expense: list[Money]


def round_money(amount: float) -> Money:
    """Round an amount to 2 decimal places for display."""
    # adding 0.0 turns -0.0 into 0.0
    return Money(round(amount + 0.0, 2))


def total_amount(records: Iterable[Transaction]) -> Money:
    """Sum every amount regardless of type."""
    return Money(sum((t.amount for t in records), 0.0))


def totals_by_category(
    records: Iterable[Transaction],
    tx_type: TransactionType | None = TransactionType.EXPENSE,
) -> dict[CategoryName, Money]:
    """Total amount per category.

    Args:
        records: Record set to aggregate.
        tx_type: Only count records of this type. Defaults to expenses, which
            is what the cost breakdown chart shows. None counts everything.

    Returns:
        Mapping of category to total, in first-seen order.
    """
    totals: dict[CategoryName, float] = {}
    for txn in records:
        if tx_type is not None and txn.type != tx_type:
            continue
        totals[txn.category] = totals.get(txn.category, 0.0) + txn.amount
    return {cat: Money(amt) for cat, amt in totals.items()}


def totals_by_month(records: Iterable[Transaction]) -> dict[Month, Money]:
    """Combined total of all amounts per month, months ascending."""
    totals: dict[Month, float] = defaultdict(float)
    for txn in records:
        totals[month_key(txn.date)] += txn.amount
    return {month: Money(totals[month]) for month in sorted(totals)}


def income_expense_by_month(records: Iterable[Transaction]) -> dict[Month, MonthSplit]:
    """Income and expense totals per month, months ascending.

    A month with records of only one type reports 0 for the other.
    """
    income: dict[Month, float] = defaultdict(float)
    expense: dict[Month, float] = defaultdict(float)
    for txn in records:
        month = month_key(txn.date)
        if txn.type == TransactionType.INCOME:
            income[month] += txn.amount
        else:
            expense[month] += txn.amount
    months = sorted(set(income) | set(expense))
    return {m: MonthSplit(income=Money(income.get(m, 0.0)), expense=Money(expense.get(m, 0.0))) for m in months}


def income_expense_balance(records: Iterable[Transaction]) -> Summary:
    """Compute total income, total expense and balance (income - expense)."""
    income = 0.0
    expense = 0.0
    for txn in records:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return Summary(income=Money(income), expense=Money(expense), balance=Money(income - expense))


def monthly_series(records: Iterable[Transaction]) -> MonthlySeries:
    """Aligned per-month income and expense series for the comparison chart."""
    split = income_expense_by_month(records)
    months = list(split)
    return MonthlySeries(
        months=months,
        income=[split[m].income for m in months],
        expense=[split[m].expense for m in months],
    )


def calculate_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate a histogram bar length in characters."""
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def sort_breakdown(breakdown: dict[CategoryName, Money], sort_by: str = "value") -> list[tuple[CategoryName, Money]]:
    """Sort a category breakdown by value (largest first) or alphabetically.

    Raises:
        ValueError: If sort_by is not one of SORT_ORDERS.
    """
    if sort_by not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort_by!r}")
    if sort_by == "alpha":
        return sorted(breakdown.items(), key=lambda x: x[0])
    return sorted(breakdown.items(), key=lambda x: x[1], reverse=True)
