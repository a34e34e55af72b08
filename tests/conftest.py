"""Shared fixtures for myexpense tests."""

from pathlib import Path
from typing import Any

import pytest
import requests

from myexpense.domain.models import CategoryName, Money, TransactionId, TransactionType
from myexpense.domain.transactions import Transaction
from myexpense.errors import RecordNotFound, StorageError


class MemoryMedium:
    """In-memory backing medium recording every call."""

    def __init__(self, stored: list[dict[str, Any]] | None = None, seeds_on_corrupt: bool = True) -> None:
        self.stored = stored
        self.seeds_on_corrupt = seeds_on_corrupt
        self.calls: list[str] = []
        self.fail_writes = False

    def read(self) -> list[dict[str, Any]] | None:
        self.calls.append("read")
        return None if self.stored is None else [dict(r) for r in self.stored]

    def bootstrap(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.calls.append("bootstrap")
        self.stored = [dict(r) for r in records]
        return [dict(r) for r in records]

    def _check(self) -> None:
        if self.fail_writes:
            raise StorageError("medium unavailable")

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("insert")
        self._check()
        self.stored = (self.stored or []) + [dict(record)]
        return dict(record)

    def replace(self, record: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("replace")
        self._check()
        for i, existing in enumerate(self.stored or []):
            if existing["id"] == record["id"]:
                self.stored[i] = dict(record)
                return dict(record)
        raise RecordNotFound(record["id"])

    def remove(self, record_id: str) -> None:
        self.calls.append("remove")
        self._check()
        before = len(self.stored or [])
        self.stored = [r for r in self.stored or [] if r["id"] != record_id]
        if len(self.stored) == before:
            raise RecordNotFound(record_id)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self._body = body

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no body")
        return self._body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeServer:
    """Records outgoing requests and answers from a queue of responses."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.responses: list[FakeResponse] = []

    def queue(self, *responses: FakeResponse) -> None:
        self.responses.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)


@pytest.fixture
def server(monkeypatch: pytest.MonkeyPatch) -> FakeServer:
    fake = FakeServer()
    monkeypatch.setattr(requests, "request", fake.request)
    return fake


def make_txn(
    record_id: str,
    tx_type: TransactionType,
    date: str,
    amount: float,
    category: str = "Food",
    description: str = "",
) -> Transaction:
    return Transaction(
        id=TransactionId(record_id),
        type=tx_type,
        date=date,
        category=CategoryName(category),
        description=description,
        amount=Money(amount),
    )


@pytest.fixture
def sample_records() -> list[Transaction]:
    """The worked example: one income and two expenses over two months."""
    return [
        make_txn("a", TransactionType.INCOME, "2024-01-10", 35000, "Salary"),
        make_txn("b", TransactionType.EXPENSE, "2024-01-12", 1200, "Bills"),
        make_txn("c", TransactionType.EXPENSE, "2024-02-01", 500, "Food"),
    ]


@pytest.fixture
def stored_dicts() -> list[dict[str, Any]]:
    return [
        {"id": "a", "type": "Income", "date": "2024-01-10", "category": "Salary", "description": "", "amount": 35000},
        {"id": "b", "type": "Expense", "date": "2024-01-12", "category": "Bills", "description": "", "amount": 1200},
        {"id": "c", "type": "Expense", "date": "2024-02-01", "category": "Food", "description": "", "amount": 500},
    ]


@pytest.fixture
def memory_medium(stored_dicts: list[dict[str, Any]]) -> MemoryMedium:
    return MemoryMedium(stored_dicts)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and data directories at a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("MYEXPENSE_LOG_LEVEL", raising=False)
    return tmp_path
