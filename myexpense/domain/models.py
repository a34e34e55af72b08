"""Domain type definitions for myexpense.

These types provide semantic clarity and help with type checking:
- Money: Amount in the single implicit currency (decimal value)
- Month: Month in YYYY-MM format
- CategoryName: Name of a transaction category
- TransactionId: Opaque record identifier
- TransactionType: Income or Expense
"""

from enum import Enum
from typing import NewType

# Amounts are kept unrounded; rounding happens only when presenting them
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

TransactionId = NewType("TransactionId", str)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        """Parse a type name case-insensitively.

        Raises:
            ValueError: If the value is not Income or Expense.
        """
        if isinstance(value, TransactionType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Unknown transaction type: {value!r}")


EXPENSE_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(c) for c in ("Food", "Travel", "Bills", "Shopping", "Entertainment", "Health", "Other")
)

INCOME_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(c) for c in ("Salary", "Freelance", "Investment", "Gift", "Other")
)
