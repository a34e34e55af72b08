"""Tests for myexpense.domain.export pure functions."""

from datetime import date

from conftest import make_txn

from myexpense.domain.export import EXPORT_HEADER, export_filename, rows_as_table, to_rows
from myexpense.domain.filters import FilterSpec, filter_transactions
from myexpense.domain.models import Month, TransactionType
from myexpense.domain.transactions import Transaction


class TestToRows:
    """Tests for to_rows."""

    def test_projects_table_columns_in_order(self, sample_records: list[Transaction]) -> None:
        """Should keep display order and table columns."""
        view = filter_transactions(sample_records, FilterSpec(month=Month("2024-01")))
        rows = to_rows(view)

        assert [r["date"] for r in rows] == ["2024-01-12", "2024-01-10"]
        assert rows[0] == {
            "date": "2024-01-12",
            "type": "Expense",
            "category": "Bills",
            "description": "",
            "amount": 1200,
        }

    def test_rounds_amounts(self) -> None:
        """Should round amounts to 2 decimal places."""
        rows = to_rows([make_txn("x", TransactionType.EXPENSE, "2024-01-01", 10.0049)])
        assert rows[0]["amount"] == 10.0

    def test_table_has_header_first(self, sample_records: list[Transaction]) -> None:
        """Should put the header before the data rows."""
        table = rows_as_table(to_rows(sample_records))

        assert table[0] == EXPORT_HEADER
        assert len(table) == len(sample_records) + 1
        assert table[1] == ["2024-01-10", "Income", "Salary", "", 35000]


class TestExportFilename:
    """Tests for export_filename."""

    def test_date_stamped(self) -> None:
        """Should stamp the file name with the date."""
        assert export_filename("xlsx", date(2025, 1, 31)) == "MyExpense_2025-01-31.xlsx"

    def test_strips_leading_dot(self) -> None:
        """Should accept an extension with a leading dot."""
        assert export_filename(".pdf", date(2025, 1, 31)) == "MyExpense_2025-01-31.pdf"
