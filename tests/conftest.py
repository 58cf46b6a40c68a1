"""Shared fixtures.

Tests are grouped by area:
- f1: record store, validators, persistence mirror
- f2: export, stats, SQL console, configuration
- f3: CLI and Web API
"""

import pytest

from studymate.config.app_config import clear_config_cache
from studymate.db.commands import SqlCommands, open_database
from studymate.db.storage import MemoryStorage


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Each test reads configuration from scratch."""
    monkeypatch.delenv("STUDYMATE_DATA_DIR", raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory storage slots."""
    return MemoryStorage()


@pytest.fixture
def db(storage) -> SqlCommands:
    """Store seeded with demo data, mirrored to memory."""
    return open_database(storage=storage)


@pytest.fixture
def valid_student() -> dict:
    """Student record that passes every rule."""
    return {
        "firstName": "Carla",
        "lastName": "Mendes",
        "email": "carla.mendes@example.com",
        "phone": "5550001111",
        "dateOfBirth": "2004-02-29",
        "enrollmentDate": "2024-09-01",
        "course": "Physics",
        "grade": "A+",
    }
