"""Liveness of the API and the record store behind it."""

from fastapi import APIRouter, Depends

from studymate.db.commands import SqlCommands
from studymate.web.deps import get_db
from studymate.web.schemas import API_VERSION, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: SqlCommands = Depends(get_db)) -> HealthResponse:
    """Report the table count and total records of the open store."""
    tables = db.show_tables()
    return HealthResponse(
        version=API_VERSION,
        tables=len(tables),
        records=sum(len(db.select(name)) for name in tables),
    )
