"""Database module: in-memory tables mirrored to a storage slot.

Provides:
- Record store and SQL-style command façade
- Per-table validation rules (users, students)
- Storage backends (file, memory) and the snapshot mirror
- Demo seed data
"""

from studymate.db.commands import SqlCommands, open_database, open_memory_database
from studymate.db.store import DuplicateIdError, RecordStore, by_id
from studymate.db.validators import StoreError, ValidationError

__all__ = [
    "DuplicateIdError",
    "RecordStore",
    "SqlCommands",
    "StoreError",
    "ValidationError",
    "by_id",
    "open_database",
    "open_memory_database",
]
