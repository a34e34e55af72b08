"""Summary and chart commands for the analytics view."""

import sys
from pathlib import Path

from rich.table import Table

from myexpense.charts import category_breakdown_figure, monthly_comparison_figure, monthly_trend_figure
from myexpense.commands.common import console, currency_symbol, fail, format_money, open_store, read_config
from myexpense.dates import month_label
from myexpense.domain.aggregate import (
    SORT_ORDERS,
    calculate_bar_length,
    income_expense_balance,
    monthly_series,
    round_money,
    sort_breakdown,
    totals_by_category,
    totals_by_month,
)
from myexpense.domain.models import TransactionType
from myexpense.store.preferences import get_theme
from myexpense.store.schema import get_db_path

BAR_WIDTH = 30


def summary_command(sort_by: str = "value", histogram: bool = True, income: bool = False) -> None:
    """Show totals, the category breakdown and the monthly comparison.

    Analytics always cover every transaction, whatever the table filters.
    """
    if sort_by not in SORT_ORDERS:
        fail(f"Sort order must be one of: {', '.join(SORT_ORDERS)}")

    config = read_config()
    currency = currency_symbol(config)
    store = open_store(config)
    records = store.records

    if not records:
        console.print("[yellow]No transactions found[/yellow]")
        return

    totals = income_expense_balance(records).rounded()
    balance_color = "green" if totals.balance >= 0 else "red"
    console.print("[bold]Summary[/bold]")
    console.print(f"  Total income:  [green]{format_money(totals.income, currency)}[/green]")
    console.print(f"  Total expense: [red]{format_money(totals.expense, currency)}[/red]")
    console.print(f"  Balance:       [{balance_color}]{format_money(totals.balance, currency)}[/{balance_color}]")

    tx_type = TransactionType.INCOME if income else TransactionType.EXPENSE
    breakdown = sort_breakdown(totals_by_category(records, tx_type), sort_by)
    console.print(f"\n[bold]{tx_type.value} by category[/bold]")
    if not breakdown:
        console.print("  [dim]None recorded[/dim]")
    max_amount = max((amt for _, amt in breakdown), default=0.0)
    for category, amount in breakdown:
        amount_display = format_money(round_money(amount), currency)
        if histogram:
            bar = "█" * calculate_bar_length(amount, max_amount, BAR_WIDTH)
            console.print(f"  {category:20} {amount_display:>14} {bar}")
        else:
            console.print(f"  {category}: {amount_display}")

    series = monthly_series(records)
    combined = totals_by_month(records)
    table = Table(title="Monthly income vs expense")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expense", justify="right", style="red")
    table.add_column("Net", justify="right")
    table.add_column("Total", justify="right", style="dim")
    for month, inc, exp in zip(series.months, series.income, series.expense):
        net = round_money(inc - exp)
        net_color = "green" if net >= 0 else "red"
        table.add_row(
            month_label(month),
            format_money(round_money(inc), currency),
            format_money(round_money(exp), currency),
            f"[{net_color}]{format_money(net, currency)}[/{net_color}]",
            format_money(round_money(combined[month]), currency),
        )
    console.print()
    console.print(table)


def charts_command(output_dir: str | None = None) -> None:
    """Write the analytics charts as PNG files."""
    config = read_config()
    store = open_store(config)
    records = store.records
    theme = get_theme(get_db_path())

    target = Path(output_dir).expanduser() if output_dir else Path.cwd()
    try:
        target.mkdir(parents=True, exist_ok=True)
        charts = {
            "category_breakdown.png": category_breakdown_figure(totals_by_category(records), theme=theme),
            "monthly_comparison.png": monthly_comparison_figure(monthly_series(records), theme=theme),
            "monthly_totals.png": monthly_trend_figure(totals_by_month(records), theme=theme),
        }
        for name, fig in charts.items():
            path = target / name
            fig.savefig(path, dpi=150)
            console.print(f"[green]✓[/green] Chart written to: {path}")
    except OSError as e:
        console.print(f"[red]Could not write charts: {e}[/red]", style="bold")
        sys.exit(1)
