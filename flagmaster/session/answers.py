"""Free-text answer matching.

Accepts common abbreviations ("USA" for "United States") and partial names
of at least MIN_CONTAINED_LENGTH characters. Pure functions, no state.
"""

import re

MIN_CONTAINED_LENGTH = 4

# Normalized alias -> normalized official name
ALIASES: dict[str, str] = {
    "usa": "united states",
    "us": "united states",
    "uk": "united kingdom",
    "uae": "united arab emirates",
    "drc": "dr congo",
    "car": "central african republic",
}

_WHITESPACE = re.compile(r"\s+")


def normalize_answer(text: str) -> str:
    """Trim, lowercase and collapse runs of whitespace."""
    return _WHITESPACE.sub(" ", (text or "").strip().lower())


def fuzzy_match(answer: str, correct: str) -> bool:
    """Check a normalized answer against a normalized correct name.

    Matches on equality, a known alias, or the answer being contained in
    the correct name when it is long enough to be unambiguous.
    """
    if not answer:
        return False
    if answer == correct:
        return True
    if ALIASES.get(answer) == correct:
        return True
    return len(answer) >= MIN_CONTAINED_LENGTH and answer in correct


def is_correct_answer(answer: str, correct: str) -> bool:
    """Normalize both sides, then fuzzy match."""
    return fuzzy_match(normalize_answer(answer), normalize_answer(correct))
