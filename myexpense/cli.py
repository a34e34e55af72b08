"""CLI entry point for myexpense."""

import typer

from myexpense.commands.admin import init_command, theme_command
from myexpense.commands.common import read_config
from myexpense.commands.export import export_command
from myexpense.commands.report import charts_command, summary_command
from myexpense.commands.transactions import add_command, delete_command, edit_command, list_command
from myexpense.config import get_setting
from myexpense.logging_setup import configure_logging

app = typer.Typer(
    name="myexpense",
    help="MyExpense - track your income and expenses",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """MyExpense - track your income and expenses."""
    if log_level is None:
        log_level = get_setting(read_config(), "logging", "level")
    configure_logging(log_level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize the myexpense database and configuration."""
    init_command(force)


@app.command(name="list")
def list_transactions(
    month: str = typer.Option(None, "--month", "-m", help="Only this month (YYYY-MM)"),
    tx_type: str = typer.Option(None, "--type", "-t", help="Only Income or Expense"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
) -> None:
    """List your transactions, newest first."""
    list_command(month, tx_type, category)


@app.command()
def add(
    tx_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category, e.g. Food or Salary"),
    description: str = typer.Option(None, "--description", help="Optional description"),
    amount: str = typer.Option(None, "--amount", "-a", help="Amount (non-negative)"),
) -> None:
    """Add a transaction. Missing fields are prompted for."""
    add_command(tx_type, date, category, description, amount)


@app.command()
def edit(
    record_id: str,
    tx_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date"),
    category: str = typer.Option(None, "--category", "-c", help="Category"),
    description: str = typer.Option(None, "--description", help="Description"),
    amount: str = typer.Option(None, "--amount", "-a", help="Amount (non-negative)"),
) -> None:
    """Edit a transaction. Without options, every field is prompted."""
    edit_command(record_id, tx_type, date, category, description, amount)


@app.command()
def delete(
    record_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(record_id, yes)


@app.command()
def summary(
    sort_by: str = typer.Option("value", help="Sort categories by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show histogram bars"),
    income: bool = typer.Option(False, "--income", help="Break down income instead of expenses"),
) -> None:
    """Show income, expense, balance and breakdowns."""
    summary_command(sort_by, histogram, income)


@app.command()
def charts(
    output_dir: str = typer.Option(None, "--output-dir", "-o", help="Directory for PNG files (default: current)"),
) -> None:
    """Write the analytics charts as PNG images."""
    charts_command(output_dir)


@app.command()
def export(
    fmt: str = typer.Argument(..., help="xlsx or pdf"),
    month: str = typer.Option(None, "--month", "-m", help="Only this month (YYYY-MM)"),
    tx_type: str = typer.Option(None, "--type", "-t", help="Only Income or Expense"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    view: str = typer.Option("table", "--view", help="'table' or 'analytics' (pdf only)"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: MyExpense_<date>.<fmt>)"),
) -> None:
    """Export the filtered table or the charts."""
    export_command(fmt, month, tx_type, category, view, output)


@app.command()
def theme(
    choice: str = typer.Argument(None, help="light, dark or toggle (omit to show)"),
) -> None:
    """Show or change the display theme."""
    theme_command(choice)


if __name__ == "__main__":
    app()
