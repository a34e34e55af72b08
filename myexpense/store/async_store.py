"""Asynchronous front for a record store over a slow (remote) medium."""

import asyncio
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from myexpense.domain.transactions import Transaction, TransactionFields
from myexpense.errors import OperationInFlight
from myexpense.logging_setup import get_logger
from myexpense.store.records import RecordStore

logger = get_logger(__name__)

T = TypeVar("T")


class AsyncRecordStore:
    """Run store operations off the event loop, one at a time.

    While an operation is outstanding, `stale` is True and the snapshot in
    `records` is the last confirmed state. Starting a load or a mutation
    before the previous one resolves raises OperationInFlight, so the
    wrapped store is only ever touched from one worker thread. Nothing is
    committed to `records` until the medium confirms; a failed call leaves
    it unchanged.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self._busy = False

    @property
    def records(self) -> tuple[Transaction, ...]:
        return self.store.records

    @property
    def stale(self) -> bool:
        return self._busy

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        if self._busy:
            logger.debug("Refusing %s while another operation is pending", action)
            raise OperationInFlight("Another operation is still in progress")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    async def _run(self, action: str, func: Callable[..., T], *args: object) -> T:
        with self._guard(action):
            return await asyncio.to_thread(func, *args)

    async def load(self) -> tuple[Transaction, ...]:
        return await self._run("load", self.store.load)

    async def create(self, fields: TransactionFields) -> Transaction:
        return await self._run("create", self.store.create, fields)

    async def update(self, record_id: str, fields: TransactionFields) -> Transaction:
        return await self._run("update", self.store.update, record_id, fields)

    async def delete(self, record_id: str) -> None:
        await self._run("delete", self.store.delete, record_id)
