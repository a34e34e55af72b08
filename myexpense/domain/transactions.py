"""Pure functions for the transaction record model.

This module contains the functional core for transaction records:
- No I/O operations (no database, no console, no files)
- Pure data transformations and validation
- Easy to test

Amounts are decimal values in a single implicit currency (Money type).
"""

import math
import random
import time
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Mapping

from myexpense.dates import is_iso_date, iso_date_days_ago
from myexpense.domain.models import CategoryName, Money, TransactionId, TransactionType
from myexpense.errors import ValidationError

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class TransactionFields:
    """Every user-editable field of a transaction (all but the id)."""

    type: TransactionType
    date: str
    category: CategoryName
    description: str
    amount: Money


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: TransactionId
    type: TransactionType
    date: str
    category: CategoryName
    description: str
    amount: Money

    @property
    def fields(self) -> TransactionFields:
        return TransactionFields(
            type=self.type,
            date=self.date,
            category=self.category,
            description=self.description,
            amount=self.amount,
        )

    def with_fields(self, fields: TransactionFields) -> "Transaction":
        """Return a copy with every field except the id replaced."""
        return replace(
            self,
            type=fields.type,
            date=fields.date,
            category=fields.category,
            description=fields.description,
            amount=fields.amount,
        )


def to_base36(number: int) -> str:
    """Encode a non-negative integer in base 36."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id(now_ms: int | None = None, rng: random.Random | None = None) -> TransactionId:
    """Generate a record id from a millisecond timestamp and a random suffix.

    Collision resistant within one device, not cryptographically secure.

    Args:
        now_ms: Epoch milliseconds. If None, uses the current time.
        rng: Random source. If None, uses the module-level generator.

    Returns:
        Id of the form "e_<timestamp36><6 random chars>".
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    choice = (rng or random).choice
    suffix = "".join(choice(_BASE36) for _ in range(6))
    return TransactionId(f"e_{to_base36(now_ms)}{suffix}")


def parse_amount(raw: Any) -> Money:
    """Parse a user-supplied amount.

    Args:
        raw: Number or numeric string (thousands separators allowed).

    Returns:
        Parsed amount.

    Raises:
        ValidationError: If the amount is missing, not finite or negative.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError("amount", "Amount is required")
    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            raise ValidationError("amount", "Amount is required")
        try:
            value = float(text)
        except ValueError:
            raise ValidationError("amount", f"Amount is not a number: {raw!r}") from None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    else:
        raise ValidationError("amount", f"Amount is not a number: {raw!r}")

    if not math.isfinite(value):
        raise ValidationError("amount", "Amount must be a finite number")
    if value < 0:
        raise ValidationError("amount", "Amount must not be negative")
    return Money(value)


def validate_fields(raw: Mapping[str, Any]) -> TransactionFields:
    """Validate raw form values and build TransactionFields.

    Checks run in form order: type, date, category, amount. The first
    failure is raised.

    Args:
        raw: Mapping with keys type, date, category, description, amount.

    Returns:
        Validated fields.

    Raises:
        ValidationError: Carrying the name of the offending field.
    """
    raw_type = raw.get("type")
    if raw_type is None or (isinstance(raw_type, str) and not raw_type.strip()):
        raise ValidationError("type", "Type is required")
    try:
        tx_type = TransactionType.parse(raw_type)
    except ValueError:
        raise ValidationError("type", f"Type must be Income or Expense, got {raw_type!r}") from None

    raw_date = str(raw.get("date") or "").strip()
    if not raw_date:
        raise ValidationError("date", "Date is required")
    if not is_iso_date(raw_date):
        raise ValidationError("date", f"Date must be YYYY-MM-DD, got {raw_date!r}")

    category = str(raw.get("category") or "").strip()
    if not category:
        raise ValidationError("category", "Category is required")

    amount = parse_amount(raw.get("amount"))
    description = str(raw.get("description") or "").strip()

    return TransactionFields(
        type=tx_type,
        date=raw_date,
        category=CategoryName(category),
        description=description,
        amount=amount,
    )


def fields_to_dict(fields: TransactionFields) -> dict[str, Any]:
    """Flatten fields into form values (type as its display name)."""
    return {
        "type": fields.type.value,
        "date": fields.date,
        "category": str(fields.category),
        "description": fields.description,
        "amount": fields.amount,
    }


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Serialize a transaction to its persisted JSON object."""
    return {"id": str(txn.id), **fields_to_dict(txn.fields)}


def transaction_from_dict(data: Mapping[str, Any]) -> Transaction:
    """Parse a persisted JSON object into a transaction.

    Records written by the expense-only schema carry no type and are read
    as expenses. Integer ids, as some document stores assign, are read as
    strings.

    Raises:
        ValidationError: If any field is invalid or the id is missing.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("record", f"Expected an object, got {type(data).__name__}")
    record_id = data.get("id")
    if isinstance(record_id, int) and not isinstance(record_id, bool):
        record_id = str(record_id)
    if not isinstance(record_id, str) or not record_id:
        raise ValidationError("id", "Record id is missing")

    values = dict(data)
    values.setdefault("type", TransactionType.EXPENSE.value)
    fields = validate_fields(values)
    return Transaction(id=TransactionId(record_id), **vars(fields))


def seed_transactions(today: date | None = None, rng: random.Random | None = None) -> list[Transaction]:
    """Build the first-run sample records, dated relative to today."""
    samples = [
        (TransactionType.EXPENSE, 3, "Food", "Lunch", 220.5),
        (TransactionType.EXPENSE, 1, "Travel", "Auto fare", 60.0),
        (TransactionType.EXPENSE, 12, "Bills", "Electricity", 1250.0),
        (TransactionType.EXPENSE, 20, "Shopping", "T-shirt", 799.0),
        (TransactionType.EXPENSE, 8, "Food", "Groceries", 640.75),
        (TransactionType.INCOME, 15, "Salary", "Monthly pay", 35000.0),
    ]
    seen: set[str] = set()
    records = []
    for tx_type, days, category, description, amount in samples:
        record_id = generate_id(rng=rng)
        while record_id in seen:
            record_id = generate_id(rng=rng)
        seen.add(record_id)
        records.append(
            Transaction(
                id=record_id,
                type=tx_type,
                date=iso_date_days_ago(days, today),
                category=CategoryName(category),
                description=description,
                amount=Money(amount),
            )
        )
    return records
