"""Key/value storage slots and the store snapshot mirror.

A storage backend behaves like a browser's local storage: string keys map
to string values. FileStorage keeps every slot in one JSON file on disk;
MemoryStorage is the in-process variant used by tests.

StorageMirror serializes the entire store into a single slot and reads it
back at startup. Failures are logged, never raised: the in-memory store
stays authoritative for the running process.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "studyMateDB"

TableData = dict[str, list[dict[str, Any]]]


class KeyValueStorage(Protocol):
    """Minimal local-storage interface."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Storage slots held in a dict."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes += 1

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """Storage slots persisted as a JSON object in a single file."""

    def __init__(self, path: Path):
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("storage.read_failed", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage.invalid_file", path=str(self.path))
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)


class StorageMirror:
    """Mirrors the whole store into one storage slot."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> TableData | None:
        """Read the stored snapshot.

        Returns:
            Table data, or None if the slot is empty or its content is malformed
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            logger.debug("storage.snapshot_not_found", key=self.key)
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("storage.snapshot_malformed", key=self.key, error=str(e))
            return None

        if not _is_table_data(data):
            logger.warning("storage.snapshot_invalid_shape", key=self.key)
            return None

        return data

    def save(self, data: TableData) -> bool:
        """Overwrite the slot with the full snapshot.

        Returns:
            True if written, False if serialization or the write failed
        """
        try:
            payload = json.dumps(data, ensure_ascii=False)
            self.storage.set_item(self.key, payload)
        except (TypeError, ValueError, OSError) as e:
            logger.error("storage.save_failed", key=self.key, error=str(e))
            return False

        logger.debug("storage.saved", key=self.key, tables=len(data))
        return True


def _is_table_data(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    for rows in data.values():
        if not isinstance(rows, list):
            return False
        if not all(isinstance(row, dict) for row in rows):
            return False
    return True
