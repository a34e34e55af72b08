"""Helpers shared by the CLI command modules."""

import asyncio
import os
import sys
import tomllib
from typing import Any, NoReturn

import pandas as pd
from rich.console import Console

from myexpense.config import get_medium_name, get_setting, load_config
from myexpense.dates import is_iso_date
from myexpense.domain.filters import FilterSpec
from myexpense.domain.models import CategoryName, Money, Month, TransactionType
from myexpense.errors import MyExpenseError, ValidationError
from myexpense.logging_setup import get_logger
from myexpense.store import AsyncRecordStore, LocalMedium, RecordStore, RemoteMedium
from myexpense.store.media import BackingMedium
from myexpense.store.schema import get_db_path

console = Console()
logger = get_logger(__name__)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def read_config() -> dict[str, Any]:
    """Load the config file, exiting on a parse error."""
    try:
        return load_config()
    except tomllib.TOMLDecodeError as e:
        fail(f"Config file is not valid TOML: {e}")


def build_medium(config: dict[str, Any]) -> BackingMedium:
    """Create the backing medium selected in the config.

    Raises:
        ValueError: If the configured medium is unknown.
        StorageError: If remote storage is selected without a base_url.
    """
    if get_medium_name(config) == "remote":
        token_env = get_setting(config, "remote", "token_env")
        return RemoteMedium(
            base_url=get_setting(config, "remote", "base_url"),
            collection=get_setting(config, "remote", "collection"),
            token=os.environ.get(token_env) if token_env else None,
            timeout=float(get_setting(config, "remote", "timeout")),
        )
    return LocalMedium(get_db_path())


def open_store(config: dict[str, Any]) -> RecordStore:
    """Build the record store and load it, exiting on failure.

    A remote set is fetched through the asynchronous store while a status
    spinner runs.
    """
    try:
        medium = build_medium(config)
        logger.debug("Using %s storage", type(medium).__name__)
        store = RecordStore(medium)
        if isinstance(medium, RemoteMedium):
            with console.status(f"Loading transactions from {medium.collection_url}..."):
                asyncio.run(AsyncRecordStore(store).load())
        else:
            store.load()
    except ValueError as e:
        fail(f"Configuration error: {e}")
    except MyExpenseError as e:
        fail(f"Storage error: {e}")
    return store


def currency_symbol(config: dict[str, Any]) -> str:
    return str(get_setting(config, "display", "currency"))


def format_money(amount: float, currency: str = "") -> str:
    """Format an amount with 2 decimal places, e.g. "₹1,250.00"."""
    return f"{currency}{amount:,.2f}"


def format_signed(amount: float, tx_type: TransactionType, currency: str = "") -> str:
    """Colored amount for tables: green income, red expense."""
    if tx_type == TransactionType.INCOME:
        return f"[green]+{format_money(amount, currency)}[/green]"
    return f"[red]-{format_money(amount, currency)}[/red]"


def parse_type_option(value: str | None) -> TransactionType | None:
    if not value:
        return None
    try:
        return TransactionType.parse(value)
    except ValueError:
        fail(f"Type must be Income or Expense, got {value!r}")


def parse_month_option(value: str | None) -> Month | None:
    if not value:
        return None
    if not is_iso_date(f"{value}-01"):
        fail(f"Month must be YYYY-MM, got {value!r}")
    return Month(value)


def build_filter(month: str | None, tx_type: str | None, category: str | None) -> FilterSpec:
    """Turn CLI filter options into a FilterSpec."""
    return FilterSpec(
        month=parse_month_option(month),
        type=parse_type_option(tx_type),
        category=CategoryName(category) if category else None,
    )


def normalize_date(text: str) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    ISO dates pass through. Other formats (DD/MM/YYYY, "3 Jan 2025", ...) are
    parsed day-first.

    Raises:
        ValidationError: If the text is not a recognizable date.
    """
    text = text.strip()
    if not text:
        raise ValidationError("date", "Date is required")
    if is_iso_date(text):
        return text
    try:
        return pd.to_datetime(text, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, OverflowError) as e:
        raise ValidationError("date", f"Invalid date format: {e}") from None


def describe(amount: Money, tx_type: TransactionType, currency: str) -> str:
    sign = "+" if tx_type == TransactionType.INCOME else "-"
    return f"{sign}{format_money(amount, currency)}"
