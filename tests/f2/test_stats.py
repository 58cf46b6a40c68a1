"""Tests for profile statistics."""

from studymate.core.stats import ProfileStats, compute_profile_stats
from studymate.db.store import by_id


def test_stats_from_seed(db):
    """Seed data: 3 sessions of 25/30/45 minutes, 1 of 3 goals done."""
    stats = compute_profile_stats(db)
    assert stats == ProfileStats(
        sessions=3,
        minutes_studied=100,
        notes=3,
        goals=3,
        goals_completed=1,
        user_name="John Doe",
        user_email="john@example.com",
    )


def test_stats_follow_changes(db):
    db.insert("sessions", {"date": "2024-01-16", "duration": 20, "subject": "Essay"})
    db.update("goals", by_id(1), {"completed": True})
    db.delete("users", None)

    stats = compute_profile_stats(db)

    assert stats.sessions == 4
    assert stats.minutes_studied == 120
    assert stats.goals_completed == 2
    assert stats.user_name is None


def test_non_numeric_duration_ignored(db):
    db.insert("sessions", {"duration": "long"})
    assert compute_profile_stats(db).minutes_studied == 100


def test_to_dict(db):
    data = compute_profile_stats(db).to_dict()
    assert data["notes"] == 3
    assert set(data) == {
        "sessions",
        "minutes_studied",
        "notes",
        "goals",
        "goals_completed",
        "user_name",
        "user_email",
    }
