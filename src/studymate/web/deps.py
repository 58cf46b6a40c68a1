"""Request dependencies for the Web API."""

from fastapi import Request

from studymate.db.commands import SqlCommands, open_database


def get_db(request: Request) -> SqlCommands:
    """Store owned by the app; opened from config on first use."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        db = open_database()
        request.app.state.db = db
    return db
