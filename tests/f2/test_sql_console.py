"""Tests for the demo SQL console."""

from datetime import date

import pytest

from studymate.core.sql_console import CLEAR_MESSAGE, ConsoleError, execute
from studymate.db.validators import ValidationError


class TestSelect:
    def test_select_from_table(self, db):
        result = execute(db, "SELECT * FROM goals;")
        assert result.command == "select"
        assert result.table == "goals"
        assert len(result.output) == 3

    def test_select_lowercase(self, db):
        assert execute(db, "select * from sessions").table == "sessions"

    def test_select_without_from_uses_default(self, db):
        result = execute(db, "SELECT *", default_table="users")
        assert result.table == "users"
        assert result.output[0]["name"] == "John Doe"

    def test_unknown_table_is_empty(self, db):
        assert execute(db, "SELECT * FROM nothing").output == []


class TestInsert:
    def test_insert_placeholder(self, db):
        result = execute(db, "INSERT INTO notes VALUES (...)")
        assert result.command == "insert"
        assert result.output["id"] == 4
        assert result.output["title"] == "New Item"
        assert result.output["date"] == date.today().isoformat()
        assert result.message == "Inserted record with ID: 4"

    def test_insert_without_into_is_invalid(self, db):
        with pytest.raises(ConsoleError, match="Invalid command syntax"):
            execute(db, "INSERT notes")

    def test_insert_into_validated_table_raises(self, db):
        """Placeholder records fail the users rules."""
        with pytest.raises(ValidationError):
            execute(db, "INSERT INTO users")
        assert len(db.select("users")) == 1


class TestOtherCommands:
    def test_show_tables(self, db):
        result = execute(db, "SHOW TABLES;")
        assert result.output == db.show_tables()

    def test_describe(self, db):
        result = execute(db, "DESCRIBE goals")
        assert result.output == ["id", "title", "completed", "deadline"]

    def test_describe_without_table(self, db):
        with pytest.raises(ConsoleError):
            execute(db, "DESCRIBE")

    def test_clear(self, db):
        db.insert("notes", {"title": "Extra"})
        result = execute(db, "CLEAR")
        assert result.message == CLEAR_MESSAGE
        assert len(db.select("notes")) == 3

    def test_fallback_selects_default(self, db):
        result = execute(db, "DROP TABLE notes", default_table="goals")
        assert result.command == "select"
        assert result.table == "goals"
        assert len(db.select("notes")) == 3
