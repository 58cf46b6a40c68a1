"""Whole-database endpoints: snapshot, reset, export, stats and console."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from studymate.config.app_config import load_app_config
from studymate.core.export import export_csv
from studymate.core.sql_console import ConsoleError, execute
from studymate.core.stats import compute_profile_stats
from studymate.db.commands import SqlCommands
from studymate.db.store import DuplicateIdError
from studymate.db.validators import ValidationError
from studymate.web.deps import get_db
from studymate.web.schemas import (
    ResetResponse,
    SqlCommandRequest,
    SqlCommandResponse,
    StatsResponse,
)

router = APIRouter(prefix="/api", tags=["database"])


@router.get("/data")
async def get_all_data(db: SqlCommands = Depends(get_db)) -> dict[str, list[dict[str, Any]]]:
    """Full-store snapshot."""
    return db.get_all_data()


@router.post("/reset", response_model=ResetResponse)
async def reset_database(db: SqlCommands = Depends(get_db)) -> ResetResponse:
    """Reset every table to the demo data."""
    db.clear()
    return ResetResponse(tables=db.show_tables())


@router.get("/export", response_class=PlainTextResponse)
async def export_data(db: SqlCommands = Depends(get_db)) -> PlainTextResponse:
    """Download every table as sectioned CSV."""
    filename = load_app_config().export.filename
    return PlainTextResponse(
        content=export_csv(db.get_all_data()),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: SqlCommands = Depends(get_db)) -> StatsResponse:
    """Profile statistics."""
    return StatsResponse(**compute_profile_stats(db).to_dict())


@router.post("/sql", response_model=SqlCommandResponse)
async def run_sql(
    body: SqlCommandRequest,
    db: SqlCommands = Depends(get_db),
) -> SqlCommandResponse:
    """Run a demo-console command."""
    try:
        result = execute(db, body.command, default_table=body.default_table)
    except ConsoleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DuplicateIdError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return SqlCommandResponse(
        command=result.command,
        table=result.table,
        output=result.output,
        message=result.message,
    )
