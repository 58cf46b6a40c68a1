"""Table and record endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from studymate.db.commands import SqlCommands
from studymate.db.store import DuplicateIdError, by_id
from studymate.db.validators import ValidationError
from studymate.utils.parsing import parse_value
from studymate.web.deps import get_db
from studymate.web.schemas import (
    FieldsResponse,
    RecordListResponse,
    TableInfo,
    TableListResponse,
)

router = APIRouter(prefix="/api/tables", tags=["tables"])


def _not_found(table: str, record_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Record {record_id} not found in '{table}'",
    )


@router.get("", response_model=TableListResponse)
async def list_tables(db: SqlCommands = Depends(get_db)) -> TableListResponse:
    """List all tables with their record counts."""
    tables = [
        TableInfo(name=name, count=len(db.select(name)), fields=db.describe(name))
        for name in db.show_tables()
    ]
    return TableListResponse(tables=tables, count=len(tables))


@router.get("/{table}", response_model=RecordListResponse)
async def select_records(
    table: str,
    request: Request,
    db: SqlCommands = Depends(get_db),
) -> RecordListResponse:
    """Select records; query parameters act as field=value filters."""
    where = {key: parse_value(value) for key, value in request.query_params.items()}
    records = db.select(table, where or None)
    return RecordListResponse(table=table, records=records, count=len(records))


@router.get("/{table}/fields", response_model=FieldsResponse)
async def describe_table(table: str, db: SqlCommands = Depends(get_db)) -> FieldsResponse:
    """Field names of the table's first record."""
    return FieldsResponse(table=table, fields=db.describe(table))


@router.post("/{table}", status_code=status.HTTP_201_CREATED)
async def insert_record(
    table: str,
    record: dict[str, Any] = Body(...),
    db: SqlCommands = Depends(get_db),
) -> dict[str, Any]:
    """Insert a record; the id is assigned when omitted."""
    try:
        return db.insert(table, record)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DuplicateIdError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.patch("/{table}/{record_id}")
async def update_record(
    table: str,
    record_id: int,
    patch: dict[str, Any] = Body(...),
    db: SqlCommands = Depends(get_db),
) -> dict[str, Any]:
    """Merge fields into the record with the given id."""
    try:
        count = db.update(table, by_id(record_id), patch)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DuplicateIdError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if count == 0:
        raise _not_found(table, record_id)

    updated_id = patch.get("id", record_id)
    return db.select(table, by_id(updated_id))[0]


@router.delete("/{table}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    table: str,
    record_id: int,
    db: SqlCommands = Depends(get_db),
) -> Response:
    """Delete the record with the given id."""
    if db.delete(table, by_id(record_id)) == 0:
        raise _not_found(table, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
