"""Transaction commands (list, add, edit, delete)."""

from datetime import date
from typing import Any

import typer
from rich.table import Table

from myexpense.commands.common import (
    build_filter,
    console,
    currency_symbol,
    describe,
    fail,
    format_money,
    format_signed,
    normalize_date,
    open_store,
    read_config,
)
from myexpense.domain.aggregate import round_money, total_amount
from myexpense.domain.filters import FilterSpec, filter_transactions
from myexpense.domain.models import EXPENSE_CATEGORIES, INCOME_CATEGORIES, TransactionType
from myexpense.domain.transactions import Transaction, TransactionFields, fields_to_dict
from myexpense.errors import MyExpenseError, RecordNotFound, ValidationError
from myexpense.session import EditController


def render_table(records: list[Transaction], spec: FilterSpec, currency: str) -> None:
    """Print the filtered table with its total."""
    if not records:
        message = "No transactions found" if spec.is_empty() else "No transactions match the current filters"
        console.print(f"[yellow]{message}[/yellow]")
        return

    table = Table(title=f"Transactions (showing {len(records)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for txn in records:
        table.add_row(
            txn.id,
            txn.date,
            txn.type.value,
            txn.category,
            txn.description,
            format_signed(round_money(txn.amount), txn.type, currency),
        )

    console.print(table)
    console.print(f"[bold]Total:[/bold] {format_money(round_money(total_amount(records)), currency)}")


def list_command(month: str | None = None, tx_type: str | None = None, category: str | None = None) -> None:
    """List transactions matching the filters, newest first."""
    config = read_config()
    spec = build_filter(month, tx_type, category)
    store = open_store(config)
    render_table(filter_transactions(store.records, spec), spec, currency_symbol(config))


def prompt_fields(defaults: dict[str, Any]) -> dict[str, Any]:
    """Ask for every form field, offering the given defaults."""
    tx_type = typer.prompt("Type (Income/Expense)", default=defaults.get("type") or TransactionType.EXPENSE.value)
    suggestions = INCOME_CATEGORIES if tx_type.strip().lower() == "income" else EXPENSE_CATEGORIES
    console.print(f"[dim]Categories: {', '.join(suggestions)}[/dim]")
    return {
        "type": tx_type,
        "date": typer.prompt("Date", default=defaults.get("date") or date.today().isoformat()),
        "category": typer.prompt("Category", default=defaults.get("category") or None),
        "description": typer.prompt("Description", default=defaults.get("description") or "", show_default=False),
        "amount": typer.prompt("Amount", default=defaults.get("amount")),
    }


def print_saved(verb: str, txn: Transaction, currency: str) -> None:
    console.print(f"[green]✓[/green] Transaction {verb}:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Type: {txn.type.value}")
    console.print(f"  Category: {txn.category}")
    if txn.description:
        console.print(f"  Description: {txn.description}")
    console.print(f"  Amount: {describe(txn.amount, txn.type, currency)}")


def submit(controller: EditController, values: dict[str, Any]) -> Transaction:
    """Normalize the date, submit, and exit on any failure."""
    try:
        if values.get("date"):
            values["date"] = normalize_date(str(values["date"]))
        return controller.submit(values)
    except ValidationError as e:
        fail(f"Invalid {e.field}: {e.message}")
    except RecordNotFound as e:
        fail(f"{e} (it may have been deleted elsewhere)")
    except MyExpenseError as e:
        fail(f"Error: {e}")


def add_command(
    tx_type: str | None,
    date_str: str | None,
    category: str | None,
    description: str | None,
    amount: str | None,
) -> None:
    """Add a transaction, prompting for anything not given."""
    config = read_config()
    store = open_store(config)
    controller = EditController(store, confirm_delete=lambda txn: False)

    values: dict[str, Any] = {
        "type": tx_type,
        "date": date_str,
        "category": category,
        "description": description,
        "amount": amount,
    }
    if tx_type is None or category is None or amount is None:
        values = prompt_fields({k: v for k, v in values.items() if v is not None})
    elif date_str is None:
        values["date"] = date.today().isoformat()

    txn = submit(controller, values)
    print_saved("added", txn, currency_symbol(config))


def edit_command(
    record_id: str,
    tx_type: str | None,
    date_str: str | None,
    category: str | None,
    description: str | None,
    amount: str | None,
) -> None:
    """Edit a transaction.

    With no field options, every field is prompted with its current value
    as default. Otherwise only the given fields change.
    """
    config = read_config()
    store = open_store(config)
    controller = EditController(store, confirm_delete=lambda txn: False)

    try:
        current: TransactionFields = controller.begin_edit(record_id)
    except RecordNotFound as e:
        fail(str(e))

    values = fields_to_dict(current)
    overrides = {
        "type": tx_type,
        "date": date_str,
        "category": category,
        "description": description,
        "amount": amount,
    }
    if all(v is None for v in overrides.values()):
        values = prompt_fields(values)
    else:
        values.update({k: v for k, v in overrides.items() if v is not None})

    txn = submit(controller, values)
    print_saved("updated", txn, currency_symbol(config))


def delete_command(record_id: str, yes: bool = False) -> None:
    """Delete a transaction after confirmation."""
    config = read_config()
    currency = currency_symbol(config)
    store = open_store(config)

    def confirm(txn: Transaction) -> bool:
        if yes:
            return True
        summary = f"{txn.date} {txn.category} {describe(txn.amount, txn.type, currency)}"
        if txn.description:
            summary += f" ({txn.description})"
        return typer.confirm(f"Delete {summary}?", default=False)

    controller = EditController(store, confirm_delete=confirm)
    try:
        deleted = controller.delete(record_id)
    except RecordNotFound as e:
        fail(str(e))
    except MyExpenseError as e:
        fail(f"Error: {e}")

    if deleted:
        console.print(f"[green]✓[/green] Deleted transaction {record_id}")
    else:
        console.print("[dim]Nothing deleted[/dim]")
