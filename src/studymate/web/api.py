"""FastAPI application factory.

Main entry point for the StudyMate Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studymate.db.commands import SqlCommands
from studymate.web.routes import (
    database_router,
    health_router,
    tables_router,
)
from studymate.web.schemas import API_VERSION

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    db = app.state.db
    logger.info(
        "api_startup",
        store_ready=db is not None,
        tables=db.show_tables() if db is not None else [],
    )
    yield


def create_app(db: SqlCommands | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db: Store to serve; opened from config on first request when None

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="StudyMate API",
        description="Web API for the StudyMate demo database",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.db = db

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(tables_router)
    app.include_router(database_router)

    return app


# Default app instance for uvicorn
app = create_app()
