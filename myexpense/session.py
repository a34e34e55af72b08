"""Edit session: validates form input and applies it to the record store."""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from myexpense.domain.transactions import Transaction, TransactionFields, validate_fields
from myexpense.errors import RecordNotFound
from myexpense.logging_setup import get_logger
from myexpense.store.records import RecordStore

logger = get_logger(__name__)

ConfirmHook = Callable[[Transaction], bool]


@dataclass(frozen=True)
class Idle:
    """No record is being edited; submit creates a new one."""


@dataclass(frozen=True)
class Editing:
    """Record `record_id` is being edited; submit updates it."""

    record_id: str


SessionState = Idle | Editing


class EditController:
    """Owns the edit state machine (Idle <-> Editing) for one store.

    Args:
        store: Record store to apply changes to.
        confirm_delete: Asked before every delete; returning False aborts it.
    """

    def __init__(self, store: RecordStore, confirm_delete: ConfirmHook) -> None:
        self.store = store
        self.confirm_delete = confirm_delete
        self.state: SessionState = Idle()

    @property
    def is_editing(self) -> bool:
        return isinstance(self.state, Editing)

    @property
    def editing_id(self) -> str | None:
        return self.state.record_id if isinstance(self.state, Editing) else None

    def begin_edit(self, record_id: str) -> TransactionFields:
        """Start editing a record and return its values for pre-filling.

        Raises:
            RecordNotFound: If no record has this id.
        """
        txn = self.store.get(record_id)
        self.state = Editing(record_id)
        logger.debug("Editing %s", record_id)
        return txn.fields

    def cancel(self) -> None:
        """Leave editing without touching the store."""
        self.state = Idle()

    def submit(self, raw: Mapping[str, Any]) -> Transaction:
        """Validate form values, then create or update a record.

        Returns:
            The stored record.

        Raises:
            ValidationError: If a field is invalid. Nothing changes.
            RecordNotFound: If the record being edited has vanished. The
                store is refreshed and the session returns to Idle.
        """
        fields = validate_fields(raw)

        if isinstance(self.state, Editing):
            record_id = self.state.record_id
            try:
                stored = self.store.update(record_id, fields)
            except RecordNotFound:
                self.state = Idle()
                self.store.refresh()
                raise
            self.state = Idle()
            return stored

        return self.store.create(fields)

    def delete(self, record_id: str) -> bool:
        """Delete a record once the confirmation hook agrees.

        Returns:
            True if deleted, False if the user declined.

        Raises:
            RecordNotFound: If no record has this id. The store is refreshed.
        """
        try:
            txn = self.store.get(record_id)
            if not self.confirm_delete(txn):
                return False
            self.store.delete(record_id)
        except RecordNotFound:
            self.store.refresh()
            raise

        if self.editing_id == record_id:
            self.state = Idle()
        return True
