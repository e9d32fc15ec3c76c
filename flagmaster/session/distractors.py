"""Adaptive distractor selection for multiple-choice questions.

Wrong options are drawn from the items that look most like the target, so
that answering means telling look-alike flags apart (Indonesia vs. Poland,
Chad vs. Romania) rather than spotting the one plausible option.

Similarity is additive and symmetric:
- +2 same category (continent)
- +2 per shared color, case-insensitive
- +6 when both color sets are identical
- +3 same layout shape
"""

import random
from typing import Iterable

from flagmaster.constants import FALLBACK_POOL_SIZE, HIGH_SIMILARITY_THRESHOLD
from flagmaster.db.models import Item


def similarity_score(a: Item, b: Item) -> int:
    """Score how easily two items can be confused (higher = more similar)."""
    score = 0
    if a.category == b.category:
        score += 2

    a_colors = a.color_set()
    b_colors = b.color_set()
    shared = len(a_colors & b_colors)
    score += shared * 2

    # An exact palette match is a strong confusion signal on its own
    if a_colors == b_colors:
        score += 6

    if a.layout == b.layout:
        score += 3
    return score


def rank_by_similarity(target: Item, pool: Iterable[Item]) -> list[tuple[Item, int]]:
    """Score every non-target item, most similar first (stable for ties)."""
    scored = [(item, similarity_score(target, item)) for item in pool if item.code != target.code]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def select_distractors(
    target: Item,
    pool: Iterable[Item],
    count: int = 3,
    rng: random.Random | None = None,
) -> list[Item]:
    """Pick ``count`` plausible wrong answers for ``target``.

    Prefers the high-similarity items (score >= 5). When there are fewer of
    those than ``count``, falls back to the top 25 by score. Small pools
    return every non-target item.

    Returns:
        Up to ``count`` distinct items, never including the target.
    """
    rng = rng or random.Random()
    scored = rank_by_similarity(target, pool)

    similar = [pair for pair in scored if pair[1] >= HIGH_SIMILARITY_THRESHOLD]
    candidates = similar if len(similar) >= count else scored[:FALLBACK_POOL_SIZE]

    # Shuffle so the strongest look-alike isn't always in the same slot
    candidates = list(candidates)
    rng.shuffle(candidates)
    return [item for item, _ in candidates[: max(0, count)]]


def build_options(
    target: Item,
    pool: Iterable[Item],
    count: int = 3,
    rng: random.Random | None = None,
) -> list[Item]:
    """Answer options: the target plus its distractors, shuffled."""
    rng = rng or random.Random()
    options = [target, *select_distractors(target, pool, count, rng)]
    rng.shuffle(options)
    return options
