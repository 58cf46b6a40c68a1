"""Route handlers for Web API."""

from studymate.web.routes.database import router as database_router
from studymate.web.routes.health import router as health_router
from studymate.web.routes.tables import router as tables_router

__all__ = [
    "database_router",
    "health_router",
    "tables_router",
]
