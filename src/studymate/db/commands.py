"""SQL-flavoured call surface over the record store.

Usage:
    from studymate.db import open_database, by_id

    db = open_database()
    db.select("notes")
    db.insert("notes", {"title": "Flashcards"})
    db.update("notes", by_id(1), {"title": "Updated"})
    db.delete("notes", by_id(3))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import structlog

from studymate.config.app_config import get_storage_path, load_app_config
from studymate.db.storage import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    StorageMirror,
    TableData,
)
from studymate.db.store import Record, RecordStore, Where

logger = structlog.get_logger(__name__)


class SqlCommands:
    """SELECT / INSERT / UPDATE / DELETE / DESCRIBE / SHOW TABLES / CLEAR."""

    def __init__(self, store: RecordStore):
        self.store = store

    # SELECT * FROM table WHERE ...
    def select(self, table: str, where: Where | None = None) -> list[Record]:
        return self.store.select(table, where)

    # INSERT INTO table VALUES (...)
    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        return self.store.insert(table, record)

    # UPDATE table SET ... WHERE ...
    def update(self, table: str, where: Where | None, patch: Mapping[str, Any]) -> int:
        return self.store.update(table, where, patch)

    # DELETE FROM table WHERE ...
    def delete(self, table: str, where: Where | None) -> int:
        return self.store.delete(table, where)

    # DESCRIBE table
    def describe(self, table: str) -> list[str]:
        return self.store.describe(table)

    # SHOW TABLES
    def show_tables(self) -> list[str]:
        return self.store.tables()

    def clear(self) -> None:
        """Reset the database to the demo dataset."""
        self.store.clear()

    def get_all_data(self) -> TableData:
        """Full-store snapshot."""
        return self.store.snapshot()


def open_database(
    data_dir: Path | None = None,
    storage: KeyValueStorage | None = None,
) -> SqlCommands:
    """Build the store from configuration.

    Args:
        data_dir: Directory for the storage file (overrides config and env)
        storage: Explicit storage backend; bypasses the file location entirely

    Returns:
        SqlCommands bound to a freshly loaded store
    """
    config = load_app_config()

    if storage is None:
        path = get_storage_path(data_dir)
        storage = FileStorage(path)
        logger.debug("db.opening", path=str(path))

    mirror = StorageMirror(storage, key=config.storage.key)
    return SqlCommands(RecordStore(mirror))


def open_memory_database(items: dict[str, str] | None = None) -> SqlCommands:
    """Store backed by in-memory storage slots."""
    return open_database(storage=MemoryStorage(items))
