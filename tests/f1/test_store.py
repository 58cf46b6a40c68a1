"""Tests for the record store operations."""

import pytest

from studymate.db.commands import open_database
from studymate.db.seed import SEED_TABLES, demo_data
from studymate.db.storage import MemoryStorage
from studymate.db.store import DuplicateIdError, by_id, matches
from studymate.db.validators import ValidationError


class TestSeed:
    """Tests for first-run demo data."""

    def test_seed_tables_present(self, db):
        """All demo tables exist after first run."""
        assert db.show_tables() == list(SEED_TABLES)

    def test_seed_counts(self, db):
        """Seed data has the expected record counts."""
        assert len(db.select("notes")) == 3
        assert len(db.select("goals")) == 3
        assert len(db.select("sessions")) == 3
        assert len(db.select("users")) == 1
        assert len(db.select("students")) == 2

    def test_first_run_writes_snapshot(self, db, storage):
        """Seeding persists the store once."""
        assert storage.writes == 1
        assert "studyMateDB" in storage.items


class TestSelect:
    """Tests for select."""

    def test_select_all_in_insertion_order(self, db):
        """Records come back in insertion order."""
        ids = [n["id"] for n in db.select("notes")]
        assert ids == [1, 2, 3]

    def test_select_with_criteria(self, db):
        """Field-equality criteria filter records."""
        notes = db.select("notes", {"category": "Mathematics"})
        assert len(notes) == 1
        assert notes[0]["title"] == "Math Formulas"

    def test_select_multiple_criteria(self, db):
        """Every criterion must match."""
        assert db.select("goals", {"completed": False, "id": 3})[0]["title"] == "Read 3 books"
        assert db.select("goals", {"completed": True, "id": 3}) == []

    def test_select_unknown_table_is_empty(self, db):
        """Unknown tables yield empty results, not errors."""
        assert db.select("missing") == []

    def test_select_returns_copies(self, db):
        """Mutating selected records does not touch the store."""
        note = db.select("notes", by_id(1))[0]
        note["title"] = "Changed"
        assert db.select("notes", by_id(1))[0]["title"] == "React Hooks"

    def test_empty_criteria_match_everything(self):
        """None and {} match any record."""
        assert matches({"id": 1}, None)
        assert matches({"id": 1}, {})

    def test_criteria_on_missing_field_do_not_match(self):
        """A field absent from the record never matches."""
        assert not matches({"id": 1}, {"title": None})


class TestInsert:
    """Tests for insert."""

    def test_insert_assigns_next_id(self, db):
        """New id is max existing id + 1."""
        note = db.insert("notes", {"title": "Flashcards"})
        assert note["id"] == 4

    def test_insert_after_gap_uses_max(self, db):
        """Id assignment follows the maximum, not the count."""
        db.delete("notes", by_id(2))
        note = db.insert("notes", {"title": "After gap"})
        assert note["id"] == 4

    def test_insert_into_new_table_starts_at_one(self, db):
        """Inserting into an unknown table creates it."""
        row = db.insert("flashcards", {"front": "Q", "back": "A"})
        assert row["id"] == 1
        assert "flashcards" in db.show_tables()

    def test_insert_zero_id_is_assigned(self, db):
        """An id of 0 counts as missing."""
        row = db.insert("notes", {"id": 0, "title": "Zero"})
        assert row["id"] == 4

    def test_insert_keeps_explicit_id(self, db):
        """An unused explicit id is kept."""
        row = db.insert("notes", {"id": 10, "title": "Ten"})
        assert row["id"] == 10
        assert db.insert("notes", {"title": "Next"})["id"] == 11

    def test_insert_duplicate_id_rejected(self, db):
        """An explicit id already in use raises and changes nothing."""
        with pytest.raises(DuplicateIdError):
            db.insert("notes", {"id": 1, "title": "Clash"})
        assert len(db.select("notes")) == 3

    def test_insert_does_not_mutate_argument(self, db):
        """The caller's dict is copied, not modified."""
        record = {"title": "Mine"}
        db.insert("notes", record)
        assert "id" not in record

    def test_insert_persists(self, db, storage):
        """Each insert writes the snapshot."""
        before = storage.writes
        db.insert("notes", {"title": "Persist me"})
        assert storage.writes == before + 1


class TestUpdate:
    """Tests for update."""

    def test_update_merges_patch(self, db):
        """Patch fields override, other fields are kept."""
        count = db.update("notes", by_id(1), {"title": "Updated: React Hooks"})
        assert count == 1
        note = db.select("notes", by_id(1))[0]
        assert note["title"] == "Updated: React Hooks"
        assert note["category"] == "Programming"

    def test_update_counts_every_match(self, db):
        """All matching records are updated."""
        assert db.update("goals", {"completed": False}, {"completed": True}) == 2
        assert all(g["completed"] for g in db.select("goals"))

    def test_update_without_criteria_hits_all(self, db):
        """None criteria update the whole table."""
        assert db.update("sessions", None, {"subject": "Review"}) == 3

    def test_update_no_match_returns_zero_without_write(self, db, storage):
        """Zero matches: no persistence write."""
        before = storage.writes
        assert db.update("notes", by_id(99), {"title": "Ghost"}) == 0
        assert storage.writes == before

    def test_update_persists_once(self, db, storage):
        """Multiple matches still write a single snapshot."""
        before = storage.writes
        db.update("sessions", None, {"duration": 50})
        assert storage.writes == before + 1


class TestUpdateIds:
    """Patches that change a record's id."""

    def test_id_taken_by_other_record_rejected(self, db, storage):
        """Renumbering onto an existing id raises and changes nothing."""
        before = storage.writes
        with pytest.raises(DuplicateIdError):
            db.update("notes", by_id(1), {"id": 2})
        assert [n["id"] for n in db.select("notes")] == [1, 2, 3]
        assert storage.writes == before

    @pytest.mark.parametrize("new_id", [None, 0, "seven", True])
    def test_non_numeric_id_rejected(self, db, new_id):
        with pytest.raises(ValidationError) as exc_info:
            db.update("notes", by_id(1), {"id": new_id})
        assert exc_info.value.field == "id"
        assert db.select("notes", by_id(1))[0]["title"] == "React Hooks"

    def test_same_id_on_many_records_rejected(self, db):
        """One id cannot be given to several matches."""
        with pytest.raises(DuplicateIdError):
            db.update("goals", {"completed": False}, {"id": 10})
        assert [g["id"] for g in db.select("goals")] == [1, 2, 3]

    def test_renumber_to_unused_id(self, db):
        assert db.update("notes", by_id(1), {"id": 10}) == 1
        assert db.select("notes", by_id(10))[0]["title"] == "React Hooks"
        assert db.insert("notes", {"title": "Next"})["id"] == 11

    def test_keeping_own_id_allowed(self, db):
        """Patching a record with its current id is not a collision."""
        assert db.update("notes", by_id(2), {"id": 2, "title": "Same id"}) == 1


class TestDelete:
    """Tests for delete."""

    def test_delete_removes_matches(self, db):
        """Deleted records never come back from select."""
        assert db.delete("notes", by_id(1)) == 1
        assert db.select("notes", by_id(1)) == []
        assert len(db.select("notes")) == 2

    def test_delete_many(self, db):
        """Count equals the number of matches removed."""
        assert db.delete("goals", {"completed": False}) == 2
        assert len(db.select("goals")) == 1

    def test_delete_no_match_no_write(self, db, storage):
        """Nothing removed: nothing persisted."""
        before = storage.writes
        assert db.delete("notes", by_id(42)) == 0
        assert db.delete("missing", by_id(1)) == 0
        assert storage.writes == before


class TestDescribeAndTables:
    """Tests for describe and show_tables."""

    def test_describe_uses_first_record(self, db):
        """Fields come from the first record."""
        assert db.describe("notes") == ["id", "title", "content", "date", "category"]

    def test_describe_empty_table(self, db):
        """Empty or unknown tables describe as []."""
        db.delete("users", None)
        assert db.describe("users") == []
        assert db.describe("missing") == []

    def test_show_tables_includes_empty(self, db):
        """Tables emptied by delete are still listed."""
        db.delete("sessions", None)
        assert "sessions" in db.show_tables()


class TestClear:
    """Tests for clear."""

    def test_clear_restores_seed(self, db):
        """Clear resets every table to the demo data."""
        db.insert("notes", {"title": "Extra"})
        db.delete("goals", None)
        db.update("users", by_id(1), {"name": "Jane Roe"})

        db.clear()

        data = db.get_all_data()
        for table, rows in demo_data().items():
            assert data[table] == rows

    def test_clear_is_idempotent(self, db):
        """clear(); clear() gives the same state."""
        db.insert("notes", {"title": "Extra"})
        db.clear()
        first = db.get_all_data()
        db.clear()
        assert db.get_all_data() == first

    def test_clear_empties_extra_tables(self, db):
        """Tables outside the seed set are emptied, not dropped."""
        db.insert("flashcards", {"front": "Q"})
        db.clear()
        assert db.select("flashcards") == []
        assert "flashcards" in db.show_tables()

    def test_clear_persists(self, db, storage):
        """Clear writes the snapshot."""
        before = storage.writes
        db.clear()
        assert storage.writes == before + 1


class TestScenario:
    """End-to-end example on the notes table."""

    def test_insert_then_delete(self, db):
        """3 notes -> insert -> 4 (id 4) -> delete id 1 -> 3."""
        assert len(db.select("notes")) == 3

        note = db.insert("notes", {"title": "Test Note", "content": "demo", "date": "2024-01-20"})
        assert note["id"] == 4
        assert len(db.select("notes")) == 4

        db.delete("notes", by_id(1))
        notes = db.select("notes")
        assert len(notes) == 3
        assert all(n["id"] != 1 for n in notes)

    def test_get_all_data_is_a_copy(self, db):
        """Snapshot edits do not leak into the store."""
        snapshot = db.get_all_data()
        snapshot["notes"].clear()
        snapshot["users"][0]["name"] = "X"
        assert len(db.select("notes")) == 3
        assert db.select("users")[0]["name"] == "John Doe"

    def test_separate_stores_are_independent(self):
        """Each open_database call owns its own store."""
        a = open_database(storage=MemoryStorage())
        b = open_database(storage=MemoryStorage())
        a.insert("notes", {"title": "Only in a"})
        assert len(a.select("notes")) == 4
        assert len(b.select("notes")) == 3
