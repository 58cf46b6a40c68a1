"""Pydantic schemas for the Web API.

Serialization models for tables, records, console commands and stats.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

API_VERSION = "0.1.0"


# =============================================================================
# TABLE SCHEMAS
# =============================================================================


class TableInfo(BaseModel):
    """Summary of one table."""

    name: str
    count: int
    fields: list[str]


class TableListResponse(BaseModel):
    """Response for SHOW TABLES."""

    tables: list[TableInfo]
    count: int


class RecordListResponse(BaseModel):
    """Response for SELECT."""

    table: str
    records: list[dict[str, Any]]
    count: int


class FieldsResponse(BaseModel):
    """Response for DESCRIBE."""

    table: str
    fields: list[str]


# =============================================================================
# DATABASE SCHEMAS
# =============================================================================


class ResetResponse(BaseModel):
    """Response after resetting to demo data."""

    message: str = "Database reset to demo data"
    tables: list[str]


class SqlCommandRequest(BaseModel):
    """Request body for the demo console."""

    command: str = Field(..., min_length=1, max_length=2000)
    default_table: str = Field(default="notes", min_length=1)


class SqlCommandResponse(BaseModel):
    """Result of a console command."""

    command: str
    table: str | None = None
    output: Any = None
    message: str = ""


class StatsResponse(BaseModel):
    """Profile statistics."""

    sessions: int
    minutes_studied: int
    notes: int
    goals: int
    goals_completed: int
    user_name: str | None = None
    user_email: str | None = None


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = API_VERSION
    tables: int
    records: int
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
