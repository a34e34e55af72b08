"""Row projection handed to spreadsheet and PDF exporters."""

from datetime import date
from typing import Iterable, TypedDict

from myexpense.domain.aggregate import round_money
from myexpense.domain.transactions import Transaction

EXPORT_HEADER = ["Date", "Type", "Category", "Description", "Amount"]

EXPORT_PREFIX = "MyExpense"


class ExportRow(TypedDict):
    """One table row as exported."""

    date: str
    type: str
    category: str
    description: str
    amount: float


def to_rows(records: Iterable[Transaction]) -> list[ExportRow]:
    """Project records onto table columns, preserving their order.

    Args:
        records: Records in display order (already filtered and sorted).

    Returns:
        Flat rows with amounts rounded to 2 decimal places.
    """
    return [
        ExportRow(
            date=txn.date,
            type=txn.type.value,
            category=str(txn.category),
            description=txn.description,
            amount=round_money(txn.amount),
        )
        for txn in records
    ]


def rows_as_table(rows: list[ExportRow]) -> list[list[object]]:
    """Header followed by one list of cell values per row."""
    table: list[list[object]] = [list(EXPORT_HEADER)]
    for row in rows:
        table.append([row["date"], row["type"], row["category"], row["description"], row["amount"]])
    return table


def export_filename(extension: str, today: date | None = None) -> str:
    """Date-stamped export file name, e.g. MyExpense_2025-01-31.xlsx."""
    if today is None:
        today = date.today()
    return f"{EXPORT_PREFIX}_{today.isoformat()}.{extension.lstrip('.')}"
