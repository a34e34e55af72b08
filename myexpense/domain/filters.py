"""Pure functions for selecting the records shown in the table view."""

from dataclasses import dataclass
from typing import Iterable

from myexpense.domain.models import CategoryName, Month, TransactionType
from myexpense.domain.transactions import Transaction


@dataclass(frozen=True)
class FilterSpec:
    """Table filter options. None means the option is not set."""

    month: Month | None = None
    type: TransactionType | None = None
    category: CategoryName | None = None

    def is_empty(self) -> bool:
        return self.month is None and self.type is None and self.category is None


def matches(txn: Transaction, spec: FilterSpec) -> bool:
    """Check a single record against every set filter option."""
    if spec.month and not txn.date.startswith(spec.month):
        return False
    if spec.type is not None and txn.type != spec.type:
        return False
    if spec.category and txn.category != spec.category:
        return False
    return True


def sort_newest_first(records: Iterable[Transaction]) -> list[Transaction]:
    """Sort records by date descending.

    ISO dates are fixed width, so string order is date order. The sort is
    stable: records sharing a date keep their input order.
    """
    return sorted(records, key=lambda t: t.date, reverse=True)


def filter_transactions(records: Iterable[Transaction], spec: FilterSpec | None = None) -> list[Transaction]:
    """Select the records matching a filter spec, newest first.

    Args:
        records: Full record set (not modified).
        spec: Filter options. None or an empty spec keeps everything.

    Returns:
        New list of matching records sorted by date descending.
    """
    if spec is None:
        spec = FilterSpec()
    return sort_newest_first(t for t in records if matches(t, spec))


def distinct_months(records: Iterable[Transaction]) -> list[Month]:
    """Months present in the records, newest first."""
    return sorted({Month(t.date[:7]) for t in records}, reverse=True)


def distinct_categories(records: Iterable[Transaction]) -> list[CategoryName]:
    """Categories present in the records, alphabetically."""
    return sorted({t.category for t in records})
