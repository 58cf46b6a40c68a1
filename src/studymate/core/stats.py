"""Profile summary numbers shown on the profile page."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from studymate.db.commands import SqlCommands


@dataclass
class ProfileStats:
    """Counts over the sessions, notes and goals tables."""

    sessions: int = 0
    minutes_studied: int = 0
    notes: int = 0
    goals: int = 0
    goals_completed: int = 0
    user_name: str | None = None
    user_email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _duration(session: dict[str, Any]) -> int:
    value = session.get("duration", 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def compute_profile_stats(db: SqlCommands) -> ProfileStats:
    """Summarize the store for the profile page."""
    sessions = db.select("sessions")
    goals = db.select("goals")
    users = db.select("users")

    user = users[0] if users else {}

    return ProfileStats(
        sessions=len(sessions),
        minutes_studied=sum(_duration(s) for s in sessions),
        notes=len(db.select("notes")),
        goals=len(goals),
        goals_completed=sum(1 for g in goals if g.get("completed") is True),
        user_name=user.get("name"),
        user_email=user.get("email"),
    )
