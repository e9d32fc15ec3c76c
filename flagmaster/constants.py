"""Shared constants for the Flagmaster application."""

# Running session score
SCORE_CORRECT = 10
SCORE_STREAK_BONUS = 5  # Added when the streak is longer than 1
SCORE_PENALTY = -5

# Dashboard thresholds
MASTERED_MIN_REPETITIONS = 3
MASTERED_MIN_INTERVAL_DAYS = 21
STRUGGLING_MIN_LAPSES = 3

# Distractor selection
HIGH_SIMILARITY_THRESHOLD = 5
FALLBACK_POOL_SIZE = 25
