"""Session queue building.

Decides which items a session asks about and in what order:
- Endless / timed: the whole catalog, shuffled, no SRS filtering
- Normal / hard: SRS blend over the whole catalog
- Category: SRS blend over one category, with a smaller new-item allotment

The SRS blend puts every due item first, then tops up with new items.
The new-item allotment throttles how fast new material is introduced
relative to the review load.
"""

import logging
import random
from datetime import date, datetime
from enum import Enum

from flagmaster.catalog.loader import CatalogError
from flagmaster.config import (
    DEFAULT_CATEGORY_NEW_PER_SESSION,
    DEFAULT_MAX_QUEUE_SIZE,
    DEFAULT_NEW_PER_SESSION,
)
from flagmaster.db.models import Item
from flagmaster.review.scheduler import ReviewScheduler

logger = logging.getLogger(__name__)


class InvalidModeError(ValueError):
    """Unknown session mode or a mode missing its required settings."""


class SessionMode(Enum):
    NORMAL = "normal"
    HARD = "hard"
    CATEGORY = "category"
    ENDLESS = "endless"
    TIMED = "timed"

    @classmethod
    def parse(cls, value: "str | SessionMode") -> "SessionMode":
        """Accept a SessionMode or its name; fail fast on anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise InvalidModeError(f"Unknown session mode {value!r} (expected one of: {valid})") from None

    @property
    def uses_srs(self) -> bool:
        """Whether answers in this mode update review cards."""
        return self in (SessionMode.NORMAL, SessionMode.HARD, SessionMode.CATEGORY)

    @property
    def multiple_choice(self) -> bool:
        """Hard mode is free text; every other mode offers options."""
        return self is not SessionMode.HARD

    @property
    def loops(self) -> bool:
        """Whether the queue is rebuilt when it runs out."""
        return self is SessionMode.ENDLESS


class QueueBuilder:
    """Builds ordered session queues from the catalog and review state."""

    def __init__(
        self,
        catalog: list[Item],
        scheduler: ReviewScheduler,
        rng: random.Random | None = None,
        new_per_session: int = DEFAULT_NEW_PER_SESSION,
        category_new_per_session: int = DEFAULT_CATEGORY_NEW_PER_SESSION,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ):
        self.catalog = list(catalog)
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.new_per_session = new_per_session
        self.category_new_per_session = category_new_per_session
        self.max_queue_size = max_queue_size

    def build(
        self,
        mode: "str | SessionMode",
        category: str | None = None,
        today: date | datetime | None = None,
    ) -> list[Item]:
        """Build the queue for a session.

        Raises:
            InvalidModeError: Unknown mode, or category mode without a category.
            CatalogError: The catalog (or the requested category) has no items.
        """
        mode = SessionMode.parse(mode)
        if not self.catalog:
            raise CatalogError("No items available")

        if mode in (SessionMode.ENDLESS, SessionMode.TIMED):
            queue = list(self.catalog)
            self.rng.shuffle(queue)
            return queue

        if mode is SessionMode.CATEGORY:
            if not category:
                raise InvalidModeError("Category mode needs a category")
            pool = [item for item in self.catalog if item.category == category]
            if not pool:
                raise CatalogError(f"No items available in category {category!r}")
            return self.blend(pool, self.category_new_per_session, today)

        return self.blend(self.catalog, self.new_per_session, today)

    def blend(
        self,
        pool: list[Item],
        new_limit: int,
        today: date | datetime | None = None,
    ) -> list[Item]:
        """All due items (shuffled), then up to ``new_limit`` new ones.

        New items are only added while the queue is shorter than
        ``max_queue_size``; due items are never dropped.
        """
        due = self.scheduler.due_items(pool, today)
        new = self.scheduler.new_items(pool)
        self.rng.shuffle(due)
        self.rng.shuffle(new)

        queue: list[Item] = []
        used: set[str] = set()
        for item in due:
            if item.code not in used:
                queue.append(item)
                used.add(item.code)

        added = 0
        for item in new:
            if added >= new_limit or len(queue) >= self.max_queue_size:
                break
            if item.code in used:
                continue
            queue.append(item)
            used.add(item.code)
            added += 1

        logger.debug(f"Built SRS queue: {len(due)} due, {added} new from a pool of {len(pool)}")
        return queue
