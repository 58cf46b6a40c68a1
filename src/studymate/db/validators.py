"""Per-table field validation rules.

Rules are declared once per table as (field, check, message) triples.

- insert: every rule of the table is checked; absent fields fail
- update: only rules whose field appears in the patch are checked

Tables without rules (notes, goals, sessions) accept anything.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9]{10}")

VALID_GRADES = ("A+", "A", "B+", "B", "C+", "C", "D", "F")


class StoreError(Exception):
    """Base error for record store operations."""


class ValidationError(StoreError):
    """Raised when a record or patch violates a table rule."""

    def __init__(self, table: str, field: str, message: str):
        self.table = table
        self.field = field
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class FieldRule:
    """A single field constraint."""

    field: str
    check: Callable[[Any], bool]
    message: str

    def passes(self, value: Any) -> bool:
        return self.check(value)


def _min_length(n: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and len(value.strip()) >= n

    return check


def _matches(pattern: re.Pattern[str]) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and bool(pattern.fullmatch(value))

    return check


def validate_email(email: Any) -> bool:
    """Check email syntax; the whole value must match."""
    return isinstance(email, str) and bool(EMAIL_PATTERN.fullmatch(email))


def _present(value: Any) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())


def _is_grade(value: Any) -> bool:
    return value in VALID_GRADES


VALIDATION_RULES: dict[str, tuple[FieldRule, ...]] = {
    "users": (
        FieldRule("name", _min_length(2), "Name must be at least 2 characters long"),
        FieldRule("email", validate_email, "Please enter a valid email address"),
    ),
    "students": (
        FieldRule(
            "firstName",
            _min_length(2),
            "First name must be at least 2 characters long",
        ),
        FieldRule("lastName", _min_length(1), "Last name is required"),
        FieldRule("email", validate_email, "Please enter a valid email address"),
        FieldRule(
            "phone",
            _matches(PHONE_PATTERN),
            "Phone number must be exactly 10 digits",
        ),
        FieldRule("dateOfBirth", _present, "Date of birth is required"),
        FieldRule("enrollmentDate", _present, "Enrollment date is required"),
        FieldRule("course", _min_length(2), "Course must be at least 2 characters long"),
        FieldRule(
            "grade",
            _is_grade,
            "Grade must be one of: " + ", ".join(VALID_GRADES),
        ),
    ),
}


def validate_record(table: str, record: Mapping[str, Any]) -> None:
    """Validate a full record before insert.

    Raises:
        ValidationError: On the first failing rule
    """
    for rule in VALIDATION_RULES.get(table, ()):
        if not rule.passes(record.get(rule.field)):
            raise ValidationError(table, rule.field, rule.message)


def validate_patch(table: str, patch: Mapping[str, Any]) -> None:
    """Validate only the fields present in an update patch.

    Raises:
        ValidationError: On the first failing rule
    """
    for rule in VALIDATION_RULES.get(table, ()):
        if rule.field in patch and not rule.passes(patch[rule.field]):
            raise ValidationError(table, rule.field, rule.message)
