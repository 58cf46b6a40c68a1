"""Tiny SQL-ish console used by the database demo page.

Recognized commands (case-insensitive, trailing ';' ignored):

    SELECT * FROM <table>     -> select(table)
    SELECT ...                -> select(default table)
    INSERT INTO <table> ...   -> insert a placeholder record
    SHOW TABLES               -> show_tables()
    DESCRIBE <table>          -> describe(table)
    CLEAR                     -> reset to demo data

Anything else falls back to selecting the default table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

import structlog

from studymate.db.commands import SqlCommands

logger = structlog.get_logger(__name__)

FROM_PATTERN = re.compile(r"\bfrom\s+([^\s;]+)", re.IGNORECASE)
INTO_PATTERN = re.compile(r"\binto\s+([^\s;(]+)", re.IGNORECASE)

CLEAR_MESSAGE = "Database cleared and reset to demo data"


class ConsoleError(Exception):
    """Raised for commands that cannot be interpreted."""


@dataclass
class ConsoleResult:
    """Outcome of one console command."""

    command: str  # select | insert | show_tables | describe | clear
    table: str | None
    output: Any
    message: str = ""


def execute(db: SqlCommands, command: str, default_table: str = "notes") -> ConsoleResult:
    """Interpret a console command against the store.

    Raises:
        ConsoleError: If the command is missing its table name
        StoreError: Propagated from the store (e.g. validation)
    """
    text = command.strip().rstrip(";").strip()
    lower = text.lower()

    if lower.startswith("select"):
        match = FROM_PATTERN.search(text)
        table = match.group(1) if match else default_table
        return ConsoleResult("select", table, db.select(table))

    if lower.startswith("insert"):
        match = INTO_PATTERN.search(text)
        if not match:
            raise ConsoleError("Invalid command syntax")
        table = match.group(1)
        record = {
            "title": "New Item",
            "content": "Added via SQL command",
            "date": date.today().isoformat(),
        }
        inserted = db.insert(table, record)
        return ConsoleResult(
            "insert",
            table,
            inserted,
            message=f"Inserted record with ID: {inserted['id']}",
        )

    if lower.startswith("show tables"):
        return ConsoleResult("show_tables", None, db.show_tables())

    if lower.startswith("describe"):
        table = text[len("describe"):].strip()
        if not table:
            raise ConsoleError("Invalid command syntax")
        return ConsoleResult("describe", table, db.describe(table))

    if lower.startswith("clear"):
        db.clear()
        return ConsoleResult("clear", None, CLEAR_MESSAGE, message=CLEAR_MESSAGE)

    logger.debug("console.fallback_select", command=text, table=default_table)
    return ConsoleResult("select", default_table, db.select(default_table))
