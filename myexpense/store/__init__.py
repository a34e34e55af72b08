"""Store layer - persistence of the transaction set and preferences.

This module re-exports the public store API for easy importing.
"""

from myexpense.store.async_store import AsyncRecordStore
from myexpense.store.media import BackingMedium, LocalMedium, RemoteMedium
from myexpense.store.preferences import get_theme, set_theme, toggle_theme
from myexpense.store.records import RecordStore
from myexpense.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Records
    "AsyncRecordStore",
    "BackingMedium",
    "LocalMedium",
    "RecordStore",
    "RemoteMedium",
    # Preferences
    "get_theme",
    "set_theme",
    "toggle_theme",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
]
