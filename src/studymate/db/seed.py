"""Demo dataset loaded on first run and by clear()."""

from __future__ import annotations

import copy
from typing import Any

_SEED: dict[str, list[dict[str, Any]]] = {
    "notes": [
        {
            "id": 1,
            "title": "React Hooks",
            "content": "useState, useEffect, useContext...",
            "date": "2024-01-15",
            "category": "Programming",
        },
        {
            "id": 2,
            "title": "Math Formulas",
            "content": "Quadratic formula: x = (-b ± √(b²-4ac)) / 2a",
            "date": "2024-01-14",
            "category": "Mathematics",
        },
        {
            "id": 3,
            "title": "Study Schedule",
            "content": "Weekly planning and time blocks...",
            "date": "2024-01-13",
            "category": "Planning",
        },
    ],
    "goals": [
        {"id": 1, "title": "Complete React Course", "completed": False, "deadline": "2024-02-01"},
        {"id": 2, "title": "Study 25 hours this week", "completed": True, "deadline": "2024-01-21"},
        {"id": 3, "title": "Read 3 books", "completed": False, "deadline": "2024-03-01"},
    ],
    "sessions": [
        {"id": 1, "date": "2024-01-15", "duration": 25, "subject": "React Study"},
        {"id": 2, "date": "2024-01-14", "duration": 30, "subject": "Math Review"},
        {"id": 3, "date": "2024-01-13", "duration": 45, "subject": "Programming Practice"},
    ],
    "users": [
        {"id": 1, "name": "John Doe", "email": "john@example.com", "isOnboarded": True},
    ],
    "students": [
        {
            "id": 1,
            "firstName": "Alice",
            "lastName": "Johnson",
            "email": "alice.johnson@example.com",
            "phone": "5551234567",
            "dateOfBirth": "2003-04-12",
            "enrollmentDate": "2023-09-01",
            "course": "Computer Science",
            "grade": "A",
        },
        {
            "id": 2,
            "firstName": "Brian",
            "lastName": "Smith",
            "email": "brian.smith@example.com",
            "phone": "5559876543",
            "dateOfBirth": "2002-11-30",
            "enrollmentDate": "2022-09-01",
            "course": "Mathematics",
            "grade": "B+",
        },
    ],
}

SEED_TABLES = tuple(_SEED)


def demo_data() -> dict[str, list[dict[str, Any]]]:
    """Return a fresh deep copy of the demo dataset."""
    return copy.deepcopy(_SEED)
