"""Export command: spreadsheet or PDF of the current view."""

import sys
from pathlib import Path

from myexpense.charts import category_breakdown_figure, monthly_comparison_figure, table_figure
from myexpense.commands.common import build_filter, console, currency_symbol, fail, open_store, read_config
from myexpense.domain.aggregate import monthly_series, total_amount, totals_by_category
from myexpense.domain.export import export_filename, to_rows
from myexpense.domain.filters import filter_transactions
from myexpense.exporters import write_pdf, write_spreadsheet
from myexpense.store.preferences import get_theme
from myexpense.store.schema import get_db_path

FORMATS = ("xlsx", "pdf")
VIEWS = ("table", "analytics")


def export_command(
    fmt: str,
    month: str | None = None,
    tx_type: str | None = None,
    category: str | None = None,
    view: str = "table",
    output: str | None = None,
) -> None:
    """Export the filtered table (xlsx or pdf) or the analytics charts (pdf)."""
    fmt = fmt.lower()
    if fmt not in FORMATS:
        fail(f"Format must be one of: {', '.join(FORMATS)}")
    if view not in VIEWS:
        fail(f"View must be one of: {', '.join(VIEWS)}")
    if fmt == "xlsx" and view != "table":
        fail("Spreadsheet export only covers the table view")

    config = read_config()
    spec = build_filter(month, tx_type, category)
    store = open_store(config)

    path = Path(output).expanduser() if output else Path.cwd() / export_filename(fmt)
    visible = filter_transactions(store.records, spec)
    rows = to_rows(visible)

    try:
        if fmt == "xlsx":
            write_spreadsheet(rows, path)
        else:
            theme = get_theme(get_db_path())
            if view == "table":
                figures = [table_figure(rows, total_amount(visible), currency_symbol(config), theme=theme)]
            else:
                figures = [
                    category_breakdown_figure(totals_by_category(store.records), theme=theme),
                    monthly_comparison_figure(monthly_series(store.records), theme=theme),
                ]
            write_pdf(figures, path)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(rows) if view == 'table' else 'charts'} to: {path}")
