"""The record store: sole owner of the active transaction set."""

from datetime import date
from typing import Any, Callable

from myexpense.domain.transactions import (
    Transaction,
    TransactionFields,
    generate_id,
    seed_transactions,
    transaction_from_dict,
    transaction_to_dict,
)
from myexpense.errors import RecordNotFound, StorageError, ValidationError
from myexpense.logging_setup import get_logger
from myexpense.store.media import BackingMedium

logger = get_logger(__name__)


class CorruptData(Exception):
    """Stored records could not be parsed."""


def parse_records(raw: list[Any], skip_invalid: bool = False) -> list[Transaction]:
    """Parse stored dicts into transactions.

    Later duplicates of an id already seen are dropped. With `skip_invalid`,
    elements that are not valid records are dropped too.

    Raises:
        CorruptData: If any element is not a valid record and `skip_invalid`
            is False.
    """
    records: list[Transaction] = []
    seen: set[str] = set()
    for i, item in enumerate(raw):
        try:
            txn = transaction_from_dict(item)
        except ValidationError as e:
            if not skip_invalid:
                raise CorruptData(f"record {i}: {e}") from e
            logger.warning("Skipping invalid record %d: %s", i, e)
            continue
        if txn.id in seen:
            logger.warning("Dropping duplicate record id %s", txn.id)
            continue
        seen.add(txn.id)
        records.append(txn)
    return records


class RecordStore:
    """Create, read, update and delete transactions over a backing medium.

    Every mutation reaches the medium first; the in-memory set only changes
    once the medium has accepted the write.
    """

    def __init__(
        self,
        medium: BackingMedium,
        id_factory: Callable[[], str] = generate_id,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.medium = medium
        self._id_factory = id_factory
        self._today = today
        self._records: list[Transaction] = []
        self._loaded = False

    @property
    def records(self) -> tuple[Transaction, ...]:
        """Read-only snapshot of the active set, in storage order."""
        return tuple(self._records)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> tuple[Transaction, ...]:
        """Read the record set from the medium.

        On a medium that seeds, missing or corrupt data is replaced by the
        seed set, which is persisted straight away. Whatever was stored
        before is lost. Any other medium is never written to here: invalid
        documents are skipped and an empty set stays empty.

        Raises:
            StorageError: If the medium cannot be read or written.
        """
        raw = self.medium.read()
        if not self.medium.seeds_on_corrupt:
            records = parse_records(raw or [], skip_invalid=True)
        else:
            records = self._parse_or_seed(raw)

        self._records = records
        self._loaded = True
        logger.debug("Loaded %d records", len(records))
        return self.records

    def _parse_or_seed(self, raw: list[Any] | None) -> list[Transaction]:
        if raw is None:
            logger.info("No stored records, bootstrapping sample data")
        else:
            try:
                return parse_records(raw)
            except CorruptData as e:
                logger.warning("Stored records are corrupt (%s); resetting to sample data", e)

        seeds = seed_transactions(self._today())
        stored = self.medium.bootstrap([transaction_to_dict(t) for t in seeds])
        return [self._from_medium(data) for data in stored]

    def refresh(self) -> tuple[Transaction, ...]:
        """Reload from the medium to reconcile with external changes."""
        return self.load()

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _index(self, record_id: str) -> int:
        for i, txn in enumerate(self._records):
            if txn.id == record_id:
                return i
        raise RecordNotFound(record_id)

    def get(self, record_id: str) -> Transaction:
        """Get a record by id.

        Raises:
            RecordNotFound: If no record has this id.
        """
        self._ensure_loaded()
        return self._records[self._index(record_id)]

    def _fresh_id(self) -> str:
        existing = {t.id for t in self._records}
        record_id = self._id_factory()
        while record_id in existing:
            record_id = self._id_factory()
        return record_id

    def create(self, fields: TransactionFields) -> Transaction:
        """Store a new record with a fresh id.

        Returns:
            The record as stored. A medium that assigns its own ids decides
            the final id.

        Raises:
            StorageError: If the medium rejects the write.
        """
        self._ensure_loaded()
        txn = Transaction(id=self._fresh_id(), **vars(fields))
        stored = self._from_medium(self.medium.insert(transaction_to_dict(txn)))
        if any(t.id == stored.id for t in self._records):
            raise StorageError(f"Medium returned an id already in use: {stored.id}")
        self._records.append(stored)
        logger.info("Created %s", stored.id)
        return stored

    def update(self, record_id: str, fields: TransactionFields) -> Transaction:
        """Replace every field of a record except its id.

        Raises:
            RecordNotFound: If no record has this id.
            StorageError: If the medium rejects the write.
        """
        self._ensure_loaded()
        index = self._index(record_id)
        txn = self._records[index].with_fields(fields)
        stored = self._from_medium(self.medium.replace(transaction_to_dict(txn)))
        self._records[index] = stored
        logger.info("Updated %s", record_id)
        return stored

    def delete(self, record_id: str) -> None:
        """Remove a record.

        Raises:
            RecordNotFound: If no record has this id.
            StorageError: If the medium rejects the delete.
        """
        self._ensure_loaded()
        index = self._index(record_id)
        self.medium.remove(record_id)
        del self._records[index]
        logger.info("Deleted %s", record_id)

    @staticmethod
    def _from_medium(data: dict[str, Any]) -> Transaction:
        try:
            return transaction_from_dict(data)
        except ValidationError as e:
            raise StorageError(f"Medium returned an invalid record: {e}") from e
