"""
FSRS Constants and Parameters

Rating scale, default weights and hard numeric bounds for the review scheduler.
Tunable values live in SchedulerParameters (parameters.py); these are the
baseline defaults it falls back to.
"""

from enum import IntEnum


# ---- Ratings ----

class Rating(IntEnum):
    """User's self-reported recall outcome for a review event."""
    AGAIN = 1  # Forgot
    HARD = 2   # Recalled with high effort
    GOOD = 3   # Recalled normally
    EASY = 4   # Recalled fluently


RATING_LABELS = {
    Rating.AGAIN: {"label": "Again", "description": "I couldn't play this correctly"},
    Rating.HARD: {"label": "Hard", "description": "It was difficult but I managed"},
    Rating.GOOD: {"label": "Good", "description": "I played it correctly"},
    Rating.EASY: {"label": "Easy", "description": "It was very easy for me"},
}


# ---- Bounds ----

S_MIN = 0.1   # Minimum stability (days)
D_MIN = 1.0   # Minimum difficulty
D_MAX = 10.0  # Maximum difficulty
MIN_INTERVAL_DAYS = 1

# Forgetting-curve factor: R(t) = (1 + t / (DECAY_FACTOR * S))^-1
DECAY_FACTOR = 9.0


# ---- Default Parameters (FSRS-4.5) ----

WEIGHT_COUNT = 17

DEFAULT_WEIGHTS = (
    0.4, 0.6, 2.4, 5.8,       # Initial stability for ratings 1-4
    4.93, 0.94, 0.86, 0.01,   # Difficulty parameters
    1.49, 0.14, 0.94, 2.18,   # Stability parameters
    0.05, 0.34, 1.26, 0.29,   # Forget-stability and hard penalty
    2.61,                     # Easy bonus
)

DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 365
DEFAULT_EASY_BONUS = 1.3    # Reserved for future tuning
DEFAULT_HARD_INTERVAL = 1.2  # Reserved for future tuning


# ---- Queue Defaults ----

DEFAULT_QUEUE_LIMIT = 10
DEFAULT_UPCOMING_DAYS = 7
STATS_WEEK_DAYS = 7

# Compare-and-swap re-reads before a concurrent write conflict is surfaced
DEFAULT_MAX_WRITE_ATTEMPTS = 3
