"""CSV export of the full store.

One section per table:

    <TABLE> TABLE
    "id","title",...      (header from the first record)
    1,"React Hooks",...   (strings quoted)

Empty tables get a "No data" line instead of a header.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any

import pandas as pd
import structlog

logger = structlog.get_logger(__name__)


def _table_section(table: str, rows: list[dict[str, Any]]) -> str:
    buffer = io.StringIO()
    buffer.write(f"\n{table.upper()} TABLE\n")

    if rows:
        columns = list(rows[0].keys())
        df = pd.DataFrame(
            [[row.get(column) for column in columns] for row in rows],
            columns=columns,
            dtype=object,
        )
        df.to_csv(
            buffer,
            index=False,
            quoting=csv.QUOTE_NONNUMERIC,
            lineterminator="\n",
        )
    else:
        buffer.write("No data\n")

    buffer.write("\n")
    return buffer.getvalue()


def export_csv(snapshot: dict[str, list[dict[str, Any]]]) -> str:
    """Render a full-store snapshot as sectioned CSV text."""
    content = "".join(_table_section(table, rows) for table, rows in snapshot.items())
    logger.info(
        "export.csv_rendered",
        tables=len(snapshot),
        records=sum(len(rows) for rows in snapshot.values()),
    )
    return content


def export_csv_file(snapshot: dict[str, list[dict[str, Any]]], path: Path) -> Path:
    """Write the CSV export to ``path``.

    Returns:
        The path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_csv(snapshot), encoding="utf-8")
    logger.info("export.csv_written", path=str(path))
    return path
