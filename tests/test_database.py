"""Tests for SQLite persistence of review cards."""

import sqlite3
from datetime import datetime

import pytest

from flagmaster.db.database import Database
from flagmaster.db.models import ReviewCard


@pytest.fixture
def sample_card():
    return ReviewCard(
        code="PL",
        ease_factor=2.36,
        interval_days=6,
        repetitions=2,
        next_review=datetime(2024, 3, 7),
        lapses=1,
        last_reviewed=datetime(2024, 3, 1, 18, 30),
    )


class TestSchema:
    """Tests for schema creation and migrations."""

    def test_init_schema_creates_table(self, temp_db):
        with temp_db.connection() as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "review_cards" in tables

    def test_init_schema_is_idempotent(self, temp_db):
        temp_db.init_schema()
        temp_db.init_schema()
        assert temp_db.count_cards() == 0

    def test_migrates_old_table(self, tmp_path):
        """Databases created before lapses were tracked gain the column."""
        db_path = tmp_path / "old.db"
        conn = sqlite3.connect(db_path)
        conn.execute(
            """
            CREATE TABLE review_cards (
                code TEXT PRIMARY KEY,
                ease_factor REAL DEFAULT 2.5,
                interval_days INTEGER DEFAULT 0,
                repetitions INTEGER DEFAULT 0,
                next_review TIMESTAMP
            )
            """
        )
        conn.execute("INSERT INTO review_cards (code, repetitions, interval_days) VALUES ('FR', 1, 1)")
        conn.commit()
        conn.close()

        db = Database(str(db_path))
        db.init_schema()
        card = db.get_card("FR")
        assert card.lapses == 0
        assert card.last_reviewed is None
        assert card.repetitions == 1

        card.lapses = 2
        db.save_cards({"FR": card})
        assert db.get_card("FR").lapses == 2
        db.close()

    def test_creates_parent_directory(self, tmp_path):
        db = Database(str(tmp_path / "nested" / "dir" / "cards.db"))
        db.init_schema()
        assert (tmp_path / "nested" / "dir").is_dir()
        db.close()


class TestCards:
    """Tests for load/save of review cards."""

    def test_save_and_load(self, temp_db, sample_card):
        temp_db.save_cards({"PL": sample_card})
        cards = temp_db.load_cards()
        assert cards == {"PL": sample_card}

    def test_save_updates_existing(self, temp_db, sample_card):
        temp_db.save_cards({"PL": sample_card})
        sample_card.repetitions = 3
        sample_card.interval_days = 14
        temp_db.save_cards({"PL": sample_card})

        assert temp_db.count_cards() == 1
        assert temp_db.get_card("PL").interval_days == 14

    def test_save_empty_mapping(self, temp_db):
        temp_db.save_cards({})
        assert temp_db.count_cards() == 0

    def test_card_without_dates(self, temp_db):
        temp_db.save_cards({"FR": ReviewCard(code="FR")})
        card = temp_db.get_card("FR")
        assert card.next_review is None
        assert card.last_reviewed is None

    def test_get_missing_card(self, temp_db):
        assert temp_db.get_card("ZZ") is None

    def test_delete_all_cards(self, temp_db, sample_card):
        temp_db.save_cards({"PL": sample_card, "FR": ReviewCard(code="FR")})
        assert temp_db.delete_all_cards() == 2
        assert temp_db.load_cards() == {}


class TestMalformedState:
    """Malformed or missing state falls back to an empty mapping."""

    def test_malformed_row(self, temp_db):
        with temp_db.connection() as conn:
            conn.execute("INSERT INTO review_cards (code, ease_factor) VALUES ('PL', 'not-a-number')")
        assert temp_db.load_cards() == {}

    def test_malformed_date(self, temp_db):
        with temp_db.connection() as conn:
            conn.execute("INSERT INTO review_cards (code, next_review) VALUES ('PL', 'someday')")
        assert temp_db.load_cards() == {}

    def test_missing_schema(self, tmp_path):
        db = Database(str(tmp_path / "empty.db"))
        assert db.load_cards() == {}
        db.close()

    def test_out_of_range_values_are_clamped(self, temp_db):
        with temp_db.connection() as conn:
            conn.execute(
                "INSERT INTO review_cards (code, ease_factor, repetitions, lapses) VALUES ('PL', 0.5, -2, -1)"
            )
        card = temp_db.load_cards()["PL"]
        assert card.ease_factor == 1.3
        assert card.repetitions == 0
        assert card.lapses == 0
