"""SQLite persistence for review cards."""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from flagmaster.db.models import ReviewCard

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS review_cards (
    code TEXT PRIMARY KEY,
    ease_factor REAL DEFAULT 2.5,
    interval_days INTEGER DEFAULT 0,
    repetitions INTEGER DEFAULT 0,
    next_review TIMESTAMP,
    lapses INTEGER DEFAULT 0,
    last_reviewed TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_cards_next_review ON review_cards(next_review);
"""


class Database:
    """SQLite database wrapper with thread-local connection pooling."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._local = threading.local()
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create a thread-local database connection."""
        if not hasattr(self._local, "conn") or self._local.conn is None:
            self._local.conn = sqlite3.connect(self.db_path)
            self._local.conn.row_factory = sqlite3.Row
        return self._local.conn

    @contextmanager
    def connection(self):
        """Get a database connection (reuses thread-local connection)."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def close(self) -> None:
        """Close the thread-local connection if open."""
        if hasattr(self._local, "conn") and self._local.conn is not None:
            self._local.conn.close()
            self._local.conn = None

    def init_schema(self) -> None:
        """Initialize the database schema and run migrations."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)
            self._migrate(conn)

    def _migrate(self, conn: sqlite3.Connection) -> None:
        """Run schema migrations for existing databases."""
        # Early databases only had the core SM-2 columns
        cursor = conn.execute("PRAGMA table_info(review_cards)")
        columns = {row[1] for row in cursor.fetchall()}
        if "lapses" not in columns:
            conn.execute("ALTER TABLE review_cards ADD COLUMN lapses INTEGER DEFAULT 0")
        if "last_reviewed" not in columns:
            conn.execute("ALTER TABLE review_cards ADD COLUMN last_reviewed TIMESTAMP")
        if "updated_at" not in columns:
            conn.execute("ALTER TABLE review_cards ADD COLUMN updated_at TIMESTAMP")

    # Card operations
    def load_cards(self) -> dict[str, ReviewCard]:
        """Load every stored card keyed by item code.

        Unreadable or malformed data yields an empty mapping, so every
        item starts out new.
        """
        try:
            with self.connection() as conn:
                rows = conn.execute("SELECT * FROM review_cards").fetchall()
                cards = [self._row_to_card(row) for row in rows]
        except (sqlite3.DatabaseError, ValueError, TypeError, KeyError) as exc:
            logger.warning(f"Could not load review cards from {self.db_path}, starting fresh: {exc}")
            return {}
        return {card.code: card for card in cards}

    def save_cards(self, cards: dict[str, ReviewCard]) -> None:
        """Insert or update the given cards."""
        if not cards:
            return
        with self.connection() as conn:
            conn.executemany(
                """
                INSERT INTO review_cards
                (code, ease_factor, interval_days, repetitions, next_review, lapses,
                 last_reviewed, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(code) DO UPDATE SET
                    ease_factor = excluded.ease_factor,
                    interval_days = excluded.interval_days,
                    repetitions = excluded.repetitions,
                    next_review = excluded.next_review,
                    lapses = excluded.lapses,
                    last_reviewed = excluded.last_reviewed,
                    updated_at = CURRENT_TIMESTAMP
                """,
                [
                    (
                        code,
                        card.ease_factor,
                        card.interval_days,
                        card.repetitions,
                        card.next_review.isoformat() if card.next_review else None,
                        card.lapses,
                        card.last_reviewed.isoformat() if card.last_reviewed else None,
                    )
                    for code, card in cards.items()
                ],
            )

    def get_card(self, code: str) -> ReviewCard | None:
        """Get a single stored card by item code."""
        with self.connection() as conn:
            row = conn.execute("SELECT * FROM review_cards WHERE code = ?", (code,)).fetchone()
            if row:
                return self._row_to_card(row)
            return None

    def count_cards(self) -> int:
        """Count stored cards."""
        with self.connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM review_cards").fetchone()[0]

    def delete_all_cards(self) -> int:
        """Forget all review progress. Returns the number of cards removed."""
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM review_cards")
            return cursor.rowcount

    def _row_to_card(self, row: sqlite3.Row) -> ReviewCard:
        """Convert a database row to a ReviewCard."""
        row_keys = row.keys()
        return ReviewCard(
            code=row["code"],
            ease_factor=max(1.3, float(row["ease_factor"])),
            interval_days=max(0, int(row["interval_days"])),
            repetitions=max(0, int(row["repetitions"])),
            next_review=datetime.fromisoformat(row["next_review"]) if row["next_review"] else None,
            lapses=max(0, int(row["lapses"] or 0)) if "lapses" in row_keys else 0,
            last_reviewed=(
                datetime.fromisoformat(row["last_reviewed"])
                if "last_reviewed" in row_keys and row["last_reviewed"]
                else None
            ),
        )
