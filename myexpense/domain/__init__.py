"""Domain models and types for myexpense.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage and presentation
"""

from myexpense.domain.models import CategoryName, Money, Month, TransactionId, TransactionType

__all__ = ["CategoryName", "Money", "Month", "TransactionId", "TransactionType"]
