"""In-memory record store with a persistence mirror.

Tables are named, insertion-ordered lists of loosely-typed records. Every
record carries a numeric ``id`` unique within its table. The whole store is
mirrored into a single storage slot after each successful mutation.

Records are selected with ``where`` criteria: a mapping of field name to
expected value. A record matches when every listed field equals the value;
``None`` or an empty mapping matches everything.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from studymate.db.seed import demo_data
from studymate.db.storage import StorageMirror, TableData
from studymate.db.validators import (
    StoreError,
    ValidationError,
    validate_patch,
    validate_record,
)

logger = structlog.get_logger(__name__)

Record = dict[str, Any]
Where = Mapping[str, Any]


class DuplicateIdError(StoreError):
    """Raised when an explicit id is already taken in the table."""

    def __init__(self, table: str, record_id: Any):
        self.table = table
        self.record_id = record_id
        super().__init__(f"Record with id {record_id!r} already exists in '{table}'")


def by_id(record_id: Any) -> dict[str, Any]:
    """Criteria matching a single id."""
    return {"id": record_id}


def matches(record: Mapping[str, Any], where: Where | None) -> bool:
    """Check whether a record satisfies field-equality criteria."""
    if not where:
        return True
    for field_name, expected in where.items():
        if field_name not in record or record[field_name] != expected:
            return False
    return True


def _numeric_id(record: Mapping[str, Any]) -> int | float:
    value = record.get("id")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class RecordStore:
    """Named tables of records, mirrored to storage on every mutation."""

    def __init__(self, mirror: StorageMirror):
        self.mirror = mirror
        self.data: TableData = {}

        snapshot = mirror.load()
        if snapshot is not None:
            self.data = snapshot
            logger.info("db.loaded_snapshot", tables=list(snapshot))
        else:
            self.data = demo_data()
            logger.info("db.seeded_demo_data")
            self._persist()

    def _persist(self) -> None:
        self.mirror.save(self.data)

    def select(self, table: str, where: Where | None = None) -> list[Record]:
        """Return copies of the matching records, in insertion order."""
        rows = self.data.get(table, [])
        return [dict(row) for row in rows if matches(row, where)]

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        """Validate and append a record, assigning an id when missing.

        Raises:
            ValidationError: If the record breaks a table rule
            DuplicateIdError: If an explicit id is already in use
        """
        rows = self.data.get(table, [])
        stored = dict(record)

        if not stored.get("id"):
            stored["id"] = max((_numeric_id(row) for row in rows), default=0) + 1
        elif any(row.get("id") == stored["id"] for row in rows):
            raise DuplicateIdError(table, stored["id"])

        validate_record(table, stored)

        self.data.setdefault(table, []).append(stored)
        self._persist()

        logger.debug("db.inserted", table=table, id=stored["id"])
        return dict(stored)

    def update(self, table: str, where: Where | None, patch: Mapping[str, Any]) -> int:
        """Merge ``patch`` into every matching record.

        Returns:
            Number of records updated

        Raises:
            ValidationError: If a patched field breaks a table rule
            DuplicateIdError: If the patch would give two records the same id
        """
        rows = self.data.get(table, [])
        positions = [i for i, row in enumerate(rows) if matches(row, where)]
        if not positions:
            return 0

        if "id" in patch:
            self._check_new_id(table, rows, positions, patch["id"])
        validate_patch(table, patch)

        for i in positions:
            rows[i] = {**rows[i], **patch}
        self._persist()

        logger.debug("db.updated", table=table, count=len(positions))
        return len(positions)

    @staticmethod
    def _check_new_id(
        table: str,
        rows: list[Record],
        positions: list[int],
        new_id: Any,
    ) -> None:
        """An id patch must stay numeric and unique within the table."""
        if not _numeric_id({"id": new_id}):
            raise ValidationError(table, "id", "Record id must be a non-zero number")
        if len(positions) > 1:
            raise DuplicateIdError(table, new_id)
        if any(row.get("id") == new_id for i, row in enumerate(rows) if i != positions[0]):
            raise DuplicateIdError(table, new_id)

    def delete(self, table: str, where: Where | None) -> int:
        """Remove every matching record.

        Returns:
            Number of records removed
        """
        rows = self.data.get(table, [])
        kept = [row for row in rows if not matches(row, where)]
        removed = len(rows) - len(kept)

        if removed:
            self.data[table] = kept
            self._persist()
            logger.debug("db.deleted", table=table, count=removed)

        return removed

    def describe(self, table: str) -> list[str]:
        """Field names of the first record; empty when the table has none."""
        rows = self.data.get(table)
        if not rows:
            return []
        return list(rows[0].keys())

    def tables(self) -> list[str]:
        return list(self.data.keys())

    def clear(self) -> None:
        """Empty every table and reload the demo dataset."""
        for table in self.data:
            self.data[table] = []
        self.data.update(demo_data())
        self._persist()
        logger.info("db.cleared")

    def snapshot(self) -> TableData:
        """Copy of every table, for export and reporting."""
        return {table: [dict(row) for row in rows] for table, rows in self.data.items()}
