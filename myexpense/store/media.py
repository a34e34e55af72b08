"""Backing media the record store persists to.

A medium deals in plain JSON-compatible dicts; parsing them into
Transaction objects is the store's job.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Protocol

import requests

from myexpense.errors import RecordNotFound, StorageError
from myexpense.logging_setup import get_logger
from myexpense.store.schema import DATA_KEY, get_value, set_value

logger = get_logger(__name__)


class BackingMedium(Protocol):
    """Persistence target behind the record store.

    `seeds_on_corrupt` says whether the store may replace missing or corrupt
    data on this medium with the sample set. A medium that shares its data
    with other clients must not be written to while loading.
    """

    seeds_on_corrupt: bool

    def read(self) -> list[dict[str, Any]] | None:
        """Return every stored record, or None if there is no usable data."""
        ...

    def bootstrap(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Persist an initial record set and return it as stored."""
        ...

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        """Store a new record and return it as stored."""
        ...

    def replace(self, record: dict[str, Any]) -> dict[str, Any]:
        """Overwrite the record with the same id and return it as stored."""
        ...

    def remove(self, record_id: str) -> None:
        """Delete the record with this id."""
        ...


class LocalMedium:
    """Record set kept as one JSON array under a versioned key in sqlite."""

    seeds_on_corrupt = True

    def __init__(self, db_path: Path | None = None, key: str = DATA_KEY) -> None:
        self.db_path = db_path
        self.key = key

    def read(self) -> list[dict[str, Any]] | None:
        raw = self._get()
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored data under %s is not valid JSON", self.key)
            return None
        if not isinstance(data, list):
            logger.warning("Stored data under %s is not an array", self.key)
            return None
        return data

    def bootstrap(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self._write(records)
        return records

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        records = self.read() or []
        records.append(record)
        self._write(records)
        return record

    def replace(self, record: dict[str, Any]) -> dict[str, Any]:
        records = self.read() or []
        for i, existing in enumerate(records):
            if isinstance(existing, dict) and existing.get("id") == record["id"]:
                records[i] = record
                break
        else:
            raise RecordNotFound(record["id"])
        self._write(records)
        return record

    def remove(self, record_id: str) -> None:
        records = self.read() or []
        kept = [r for r in records if not (isinstance(r, dict) and r.get("id") == record_id)]
        if len(kept) == len(records):
            raise RecordNotFound(record_id)
        self._write(kept)

    def _get(self) -> str | None:
        try:
            return get_value(self.key, self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Could not read local data: {e}") from e

    def _write(self, records: list[dict[str, Any]]) -> None:
        try:
            set_value(self.key, json.dumps(records, ensure_ascii=False), self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Could not write local data: {e}") from e


class RemoteMedium:
    """Records kept as documents in a remote collection behind a JSON API."""

    seeds_on_corrupt = False

    def __init__(
        self,
        base_url: str,
        collection: str = "transactions",
        token: str | None = None,
        timeout: float = 10,
    ) -> None:
        if not base_url:
            raise StorageError("Remote storage needs a base_url")
        self.base_url = base_url.rstrip("/")
        self.collection = collection
        self.token = token
        self.timeout = timeout

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}/{self.collection}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, url: str, record_id: str | None = None, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
            if response.status_code == 404 and record_id is not None:
                raise RecordNotFound(record_id)
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Remote {method} failed: {e}") from e
        return response

    def read(self) -> list[dict[str, Any]] | None:
        response = self._request(
            "GET",
            self.collection_url,
            params={"orderBy": "date", "direction": "desc"},
        )
        try:
            documents = response.json()["documents"]
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Unexpected response listing {self.collection}: {e}") from e
        if not isinstance(documents, list):
            raise StorageError(f"Unexpected response listing {self.collection}: documents is not a list")
        return documents

    def bootstrap(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [self.insert(record) for record in records]

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        response = self._request("POST", self.collection_url, json=record)
        return self._document(response, record)

    def replace(self, record: dict[str, Any]) -> dict[str, Any]:
        record_id = record["id"]
        response = self._request("PUT", f"{self.collection_url}/{record_id}", record_id=record_id, json=record)
        return self._document(response, record)

    def remove(self, record_id: str) -> None:
        self._request("DELETE", f"{self.collection_url}/{record_id}", record_id=record_id)

    @staticmethod
    def _document(response: requests.Response, sent: dict[str, Any]) -> dict[str, Any]:
        """Merge the server's reply over what was sent; the server's id wins."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            return sent
        return {**sent, **body}
