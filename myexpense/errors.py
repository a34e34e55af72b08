"""Exceptions raised by the myexpense core."""


class MyExpenseError(Exception):
    """Base class for all myexpense errors."""


class ValidationError(MyExpenseError):
    """Submitted transaction fields failed validation.

    Attributes:
        field: Name of the offending field.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class RecordNotFound(MyExpenseError):
    """No record with the given id exists in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Transaction {record_id} not found")
        self.record_id = record_id


class StorageError(MyExpenseError):
    """The backing medium failed to read or write."""


class OperationInFlight(MyExpenseError):
    """A store operation was started while another is still outstanding."""
