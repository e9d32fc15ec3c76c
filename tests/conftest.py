"""Shared pytest fixtures for the Flagmaster test suite."""

import random
from datetime import date

import pytest

from flagmaster.catalog.content import SEED_CATALOG
from flagmaster.config import Config
from flagmaster.db.database import Database
from flagmaster.db.models import Item
from flagmaster.review.scheduler import ReviewScheduler


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary SQLite database with schema initialized."""
    db_path = tmp_path / "test.db"
    db = Database(str(db_path))
    db.init_schema()
    yield db
    db.close()


@pytest.fixture
def today():
    """A fixed review day so due dates are reproducible."""
    return date(2024, 3, 1)


@pytest.fixture
def rng():
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def item_a():
    return Item(code="A", name="Alpha", category="X", colors=("red", "white"), layout="stripes")


@pytest.fixture
def item_b():
    return Item(code="B", name="Bravo", category="X", colors=("Red", "White"), layout="stripes")


@pytest.fixture
def item_c():
    return Item(code="C", name="Charlie", category="Y", colors=("blue",), layout="cross")


@pytest.fixture
def item_d():
    return Item(code="D", name="Delta", category="Y", colors=("blue",), layout="stripes")


@pytest.fixture
def small_catalog(item_a, item_b, item_c, item_d):
    """Four-item catalog with one look-alike pair (A/B)."""
    return [item_a, item_b, item_c, item_d]


@pytest.fixture
def flag_catalog():
    """The built-in flag catalog."""
    return list(SEED_CATALOG)


@pytest.fixture
def scheduler():
    """In-memory scheduler with no card store."""
    return ReviewScheduler()


@pytest.fixture
def db_scheduler(temp_db):
    """Scheduler persisting to a temporary database."""
    return ReviewScheduler(temp_db)


@pytest.fixture
def config(tmp_path):
    """Test configuration."""
    return Config(
        database_path=str(tmp_path / "flagmaster.db"),
        new_per_session=5,
        category_new_per_session=3,
        max_queue_size=20,
        retry_gaps=(2, 5, 9),
        random_seed=42,
    )
