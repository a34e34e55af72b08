"""Tests for export sinks and chart rendering."""

from pathlib import Path

import pandas as pd
from conftest import make_txn
from matplotlib.figure import Figure

from myexpense.charts import (
    category_breakdown_figure,
    monthly_comparison_figure,
    monthly_trend_figure,
    table_figure,
)
from myexpense.domain.aggregate import monthly_series, total_amount, totals_by_category, totals_by_month
from myexpense.domain.export import EXPORT_HEADER, to_rows
from myexpense.domain.filters import filter_transactions
from myexpense.domain.models import Money, TransactionType
from myexpense.domain.transactions import Transaction
from myexpense.exporters import SHEET_NAME, write_pdf, write_spreadsheet


class TestWriteSpreadsheet:
    """Tests for write_spreadsheet."""

    def test_writes_header_and_rows(self, tmp_path: Path, sample_records: list[Transaction]) -> None:
        """Should write one sheet with the header and every row in order."""
        path = tmp_path / "out" / "export.xlsx"
        write_spreadsheet(to_rows(filter_transactions(sample_records)), path)

        frame = pd.read_excel(path, sheet_name=SHEET_NAME)
        assert list(frame.columns) == EXPORT_HEADER
        assert list(frame["Date"]) == ["2024-02-01", "2024-01-12", "2024-01-10"]
        assert list(frame["Amount"]) == [500, 1200, 35000]

    def test_empty_rows(self, tmp_path: Path) -> None:
        """Should still write the header for an empty view."""
        path = tmp_path / "empty.xlsx"
        write_spreadsheet([], path)
        assert list(pd.read_excel(path).columns) == EXPORT_HEADER


class TestWritePdf:
    """Tests for write_pdf and the figures it consumes."""

    def test_writes_pdf(self, tmp_path: Path, sample_records: list[Transaction]) -> None:
        """Should write a PDF document from rendered views."""
        figures = [
            table_figure(to_rows(sample_records), total_amount(sample_records), "₹"),
            category_breakdown_figure(totals_by_category(sample_records)),
            monthly_comparison_figure(monthly_series(sample_records), theme="dark"),
        ]
        path = write_pdf(figures, tmp_path / "export.pdf")

        assert path.read_bytes().startswith(b"%PDF")

    def test_figures_handle_empty_data(self) -> None:
        """Should render placeholders for empty inputs."""
        assert isinstance(category_breakdown_figure({}), Figure)
        assert isinstance(monthly_comparison_figure(monthly_series([])), Figure)
        assert isinstance(monthly_trend_figure(totals_by_month([])), Figure)
        assert isinstance(table_figure([], Money(0)), Figure)

    def test_table_total_sums_unrounded_amounts(self) -> None:
        """Should show the rounded sum of raw amounts, not the sum of rounded rows."""
        records = [make_txn(f"t{i}", TransactionType.EXPENSE, "2024-03-01", 1.004) for i in range(3)]
        fig = table_figure(to_rows(records), total_amount(records))

        texts = [cell.get_text().get_text() for cell in fig.axes[0].tables[0].get_celld().values()]
        assert "1.00" in texts
        assert "3.01" in texts
        assert "3.00" not in texts
