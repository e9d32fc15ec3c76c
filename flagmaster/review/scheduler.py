"""Per-item review scheduling on top of SM-2.

The scheduler owns the card map for one learner. Cards are created lazily,
mutated only here, and written through to an optional card store at the
boundaries the caller chooses (session start, after each answer).
"""

import logging
from datetime import date, datetime
from typing import Iterable, Protocol

from flagmaster.constants import (
    MASTERED_MIN_INTERVAL_DAYS,
    MASTERED_MIN_REPETITIONS,
    STRUGGLING_MIN_LAPSES,
)
from flagmaster.db.models import Item, ReviewCard, ReviewSummary
from flagmaster.review.sm2 import calculate_correct, calculate_incorrect, midnight

logger = logging.getLogger(__name__)


def _review_time(today: date | datetime | None) -> datetime:
    """When a review happened: ``today`` if injected, else now."""
    if today is None:
        return datetime.now()
    if isinstance(today, datetime):
        return today
    return midnight(today)


class CardStore(Protocol):
    """Key-value persistence for review cards."""

    def load_cards(self) -> dict[str, ReviewCard]: ...

    def save_cards(self, cards: dict[str, ReviewCard]) -> None: ...

    def delete_all_cards(self) -> int: ...


class ReviewScheduler:
    """Tracks SM-2 state for every item and answers "is this due?"."""

    def __init__(
        self,
        store: CardStore | None = None,
        count_new_as_due: bool = False,
        cards: dict[str, ReviewCard] | None = None,
    ):
        self.store = store
        self.count_new_as_due = count_new_as_due
        self.cards: dict[str, ReviewCard] = dict(cards or {})

    def load(self) -> int:
        """Replace the in-memory cards with the store's contents.

        Returns the number of cards loaded.
        """
        if self.store is None:
            return 0
        self.cards = dict(self.store.load_cards())
        logger.info(f"Loaded {len(self.cards)} review cards")
        return len(self.cards)

    def save(self, codes: Iterable[str] | None = None) -> None:
        """Write cards to the store (all of them, or only ``codes``)."""
        if self.store is None:
            return
        if codes is None:
            self.store.save_cards(dict(self.cards))
        else:
            self.store.save_cards({code: self.cards[code] for code in codes if code in self.cards})

    def reset(self) -> None:
        """Forget all progress, in memory and in the store."""
        self.cards.clear()
        if self.store is not None:
            removed = self.store.delete_all_cards()
            logger.info(f"Reset review progress ({removed} cards removed)")

    def get_or_create(self, code: str) -> ReviewCard:
        """Get the card for an item, creating a fresh one on first access."""
        card = self.cards.get(code)
        if card is None:
            card = ReviewCard(code=code)
            self.cards[code] = card
        return card

    def record_correct(
        self, code: str, quality: int = 4, today: date | datetime | None = None
    ) -> ReviewCard:
        """Apply a correct answer (quality 3=hard, 4=good, 5=easy)."""
        card = self.get_or_create(code)
        result = calculate_correct(
            quality=quality,
            ease_factor=card.ease_factor,
            interval_days=card.interval_days,
            repetitions=card.repetitions,
            today=today,
        )
        card.ease_factor = result.ease_factor
        card.interval_days = result.interval_days
        card.repetitions = result.repetitions
        card.next_review = result.next_review
        card.last_reviewed = _review_time(today)
        return card

    def record_incorrect(self, code: str, today: date | datetime | None = None) -> ReviewCard:
        """Apply a miss: progress resets and the lapse count grows."""
        card = self.get_or_create(code)
        result = calculate_incorrect(ease_factor=card.ease_factor, today=today)
        card.ease_factor = result.ease_factor
        card.interval_days = result.interval_days
        card.repetitions = result.repetitions
        card.next_review = result.next_review
        card.lapses += 1
        card.last_reviewed = _review_time(today)
        return card

    def peek(self, code: str) -> ReviewCard:
        """The item's card, or a default one that is not stored."""
        return self.cards.get(code) or ReviewCard(code=code)

    def is_new(self, code: str) -> bool:
        """True if the item has never been scheduled."""
        card = self.peek(code)
        return card.repetitions == 0 and card.next_review is None

    def is_due(self, code: str, today: date | datetime | None = None) -> bool:
        """Check whether an item should be reviewed on ``today``.

        New items are only due when ``count_new_as_due`` is set; otherwise
        they are left to the new-item allotment of the queue builder.
        """
        card = self.peek(code)
        if card.repetitions == 0 and card.next_review is None:
            return self.count_new_as_due
        if card.next_review is None:
            return True
        return card.next_review <= midnight(today or date.today())

    def due_items(self, items: Iterable[Item], today: date | datetime | None = None) -> list[Item]:
        """Items due on ``today``, in catalog order."""
        return [item for item in items if self.is_due(item.code, today)]

    def new_items(self, items: Iterable[Item]) -> list[Item]:
        """Items never scheduled, in catalog order."""
        return [item for item in items if self.is_new(item.code)]

    def summary(self, items: Iterable[Item], today: date | datetime | None = None) -> ReviewSummary:
        """Count mastered, learning, struggling and due items."""
        result = ReviewSummary()
        for item in items:
            card = self.peek(item.code)
            result.total += 1
            result.by_category[item.category] = result.by_category.get(item.category, 0) + 1

            if card.repetitions == 0 and card.next_review is None:
                result.new += 1
            if (
                card.repetitions >= MASTERED_MIN_REPETITIONS
                and card.interval_days >= MASTERED_MIN_INTERVAL_DAYS
            ):
                result.mastered += 1
            elif card.repetitions > 0:
                result.learning += 1
            if card.lapses >= STRUGGLING_MIN_LAPSES:
                result.struggling += 1
            if self.is_due(item.code, today):
                result.due += 1
        return result
