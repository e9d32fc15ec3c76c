"""SM-2 Spaced Repetition Algorithm.

Based on the SuperMemo SM-2 algorithm by Piotr Wozniak.
https://www.supermemo.com/en/blog/application-of-a-computer-to-improve-the-results-obtained-in-working-with-the-supermemo-method

Dates are handled at day granularity: every scheduled review lands on a
midnight, so an item's due status is stable for a whole calendar day.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5
LAPSE_EASE_PENALTY = 0.2


@dataclass
class SM2Result:
    """Result of an SM-2 calculation."""

    ease_factor: float
    interval_days: int
    repetitions: int
    next_review: datetime


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3, not 2)."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def midnight(day: date | datetime) -> datetime:
    """Strip the time of day."""
    return datetime(day.year, day.month, day.day)


def add_days(day: date | datetime, days: int) -> datetime:
    """Midnight of the day ``days`` after ``day``."""
    return midnight(day) + timedelta(days=days)


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """Apply the SM-2 ease factor formula, floored at 1.3 and rounded to 2 decimals."""
    new_ef = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_ef = max(MIN_EASE_FACTOR, new_ef)
    return round_half_up(new_ef, 2)


def calculate_correct(
    quality: int = 4,
    ease_factor: float = DEFAULT_EASE_FACTOR,
    interval_days: int = 0,
    repetitions: int = 0,
    today: date | datetime | None = None,
) -> SM2Result:
    """
    Calculate the next review after a correct answer.

    Args:
        quality: Recall quality (3-5):
            5 - Easy, no hesitation
            4 - Good, some hesitation
            3 - Hard, recalled with difficulty
            Values outside the range are clamped.

        ease_factor: Current ease factor (default 2.5)
        interval_days: Current interval in days
        repetitions: Number of consecutive correct reviews
        today: Day of the review (defaults to today)

    Returns:
        SM2Result with updated values and next review date.
    """
    quality = max(3, min(5, quality))
    today = today or date.today()

    new_ef = next_ease_factor(ease_factor, quality)

    if repetitions == 0:
        new_interval = 1
    elif repetitions == 1:
        new_interval = 6
    else:
        new_interval = int(round_half_up(interval_days * new_ef))

    return SM2Result(
        ease_factor=new_ef,
        interval_days=new_interval,
        repetitions=repetitions + 1,
        next_review=add_days(today, new_interval),
    )


def calculate_incorrect(
    ease_factor: float = DEFAULT_EASE_FACTOR,
    today: date | datetime | None = None,
) -> SM2Result:
    """Calculate the next review after a miss.

    Progress resets to the beginning and the item comes back tomorrow. The
    ease factor drops but never below the 1.3 floor, which bounds how
    punishing repeated failure can be.
    """
    today = today or date.today()
    new_ef = round_half_up(max(MIN_EASE_FACTOR, ease_factor - LAPSE_EASE_PENALTY), 2)

    return SM2Result(
        ease_factor=new_ef,
        interval_days=1,
        repetitions=0,
        next_review=add_days(today, 1),
    )


def quality_from_performance(correct: bool, response_time_ms: int | None = None) -> int:
    """
    Convert a correct/incorrect answer + optional response time to SM-2 quality.

    Args:
        correct: Whether the answer was correct
        response_time_ms: Optional response time in milliseconds

    Returns:
        Quality score: 0 for a miss, otherwise 3-5
    """
    if not correct:
        return 0

    if response_time_ms is None:
        return 4  # Good, assume some hesitation

    # Fast answer = easy, slow = hard
    if response_time_ms < 2000:
        return 5
    elif response_time_ms < 5000:
        return 4
    else:
        return 3
