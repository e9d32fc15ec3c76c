"""Data models for Flagmaster."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Item:
    """A single learnable item (a country flag).

    The colors and layout feed the distractor similarity score:
    - colors: Color names on the flag, compared case-insensitively
    - layout: Layout shape, e.g. "stripes", "cross", "emblem"
    """

    code: str
    name: str
    category: str = ""  # Continent
    colors: tuple[str, ...] = ()
    layout: str = ""

    def color_set(self) -> frozenset[str]:
        """Return the lowercased set of colors."""
        return frozenset(color.lower() for color in self.colors)


@dataclass
class ReviewCard:
    """SM-2 spaced repetition state for one item."""

    code: str = ""
    ease_factor: float = 2.5
    interval_days: int = 0
    repetitions: int = 0
    next_review: datetime | None = None  # Always a midnight
    lapses: int = 0
    last_reviewed: datetime | None = None


@dataclass
class AnswerOutcome:
    """Result of a single answer, reported to outcome listeners."""

    item_code: str
    was_correct: bool
    new_ease_factor: float
    new_interval: int
    correct_answer: str = ""
    tick: int = 0
    from_retry: bool = False
    score: int = 0
    streak: int = 0


@dataclass
class ReviewSummary:
    """Progress counts for the dashboard."""

    total: int = 0
    new: int = 0
    learning: int = 0
    mastered: int = 0
    struggling: int = 0
    due: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
