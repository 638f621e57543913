"""
Memory Model - Forgetting-Curve Math

Pure functions for the FSRS memory model. No I/O, no mutable state.

Key concepts:
- Stability (S): days until recall probability decays to the target level
- Difficulty (D): how hard the item is to retain (1-10 scale)
- Retrievability (R): probability of successful recall after t days

Every function takes the SchedulerParameters it should use; the default is the
global FSRS-4.5 parameter set.
"""

from __future__ import annotations
import math

from srs_core.fsrs.constants import (
    D_MAX,
    D_MIN,
    DECAY_FACTOR,
    MIN_INTERVAL_DAYS,
    S_MIN,
    Rating,
)
from srs_core.fsrs.parameters import DEFAULT_PARAMETERS, SchedulerParameters
from srs_core.fsrs.validation import parse_rating


def clamp_difficulty(difficulty: float) -> float:
    return max(D_MIN, min(D_MAX, difficulty))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positive values."""
    return int(math.floor(value + 0.5))


def init_stability(
    rating: Rating,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Initial stability for a first-ever review.

    Formula:
        S_0 = max(0.1, w[rating - 1])

    The first four weights are the base stabilities seeded for each rating.
    """
    rating = parse_rating(rating)
    return max(S_MIN, params.w[rating - 1])


def init_difficulty(
    rating: Rating,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Initial difficulty for a first-ever review.

    Formula:
        D_0 = clip(w[4] - (rating - 3) * w[5], 1, 10)

    Centered on w[4]: ratings above Good lower it, ratings below raise it.
    """
    rating = parse_rating(rating)
    w = params.w
    return clamp_difficulty(w[4] - (rating - 3) * w[5])


def next_difficulty(
    difficulty: float,
    rating: Rating,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Mean-reverting difficulty update.

    Formula:
        D' = clip(w[7] * (w[4] - D) + (D - w[6] * (rating - 3)), 1, 10)

    The rating perturbs D directly while w[7] pulls it back toward w[4].
    """
    rating = parse_rating(rating)
    w = params.w
    return clamp_difficulty(w[7] * (w[4] - difficulty) + (difficulty - w[6] * (rating - 3)))


def retrievability(elapsed_days: float, stability: float) -> float:
    """
    Probability of recall after elapsed_days, given stability.

    Formula:
        R = (1 + t / (9 * S))^-1

    R = 1 at t = 0 and decays smoothly as time passes.
    """
    return 1.0 / (1.0 + elapsed_days / (DECAY_FACTOR * stability))


def next_recall_stability(
    difficulty: float,
    stability: float,
    retrievability: float,
    rating: Rating,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Stability after a successful recall (Hard/Good/Easy).

    Formula:
        S' = S * (1 + e^w[8] * (11 - D) * S^-w[9] * (e^((1 - R) * w[10]) - 1)
                  * hard_penalty * easy_bonus)

    Where:
        - hard_penalty = w[15] for Hard, else 1
        - easy_bonus = w[16] for Easy, else 1

    Lower R (a recall that was nearly lost) and lower D both produce larger
    gains.

    Returns:
        New stability, floored at 0.1
    """
    rating = parse_rating(rating)
    w = params.w
    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    growth = (
        math.exp(w[8])
        * (11.0 - difficulty)
        * math.pow(stability, -w[9])
        * (math.exp((1.0 - retrievability) * w[10]) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return max(S_MIN, stability * (1.0 + growth))


def next_forget_stability(
    difficulty: float,
    stability: float,
    retrievability: float,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Stability after a lapse (Again).

    Formula:
        S' = max(0.1, w[11] * D^-w[12] * ((S + 1)^w[13] - 1) * e^((1 - R) * w[14]))
    """
    w = params.w
    new_stability = (
        w[11]
        * math.pow(difficulty, -w[12])
        * (math.pow(stability + 1.0, w[13]) - 1.0)
        * math.exp((1.0 - retrievability) * w[14])
    )
    return max(S_MIN, new_stability)


def next_interval(
    stability: float,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> int:
    """
    Days until predicted recall drops to the requested retention.

    Inverts the forgetting curve:
        t = 9 * S * (1 / retention - 1)

    Returns:
        Whole days, clamped to [1, maximum_interval]
    """
    interval = round_half_up(DECAY_FACTOR * stability * (1.0 / params.request_retention - 1.0))
    return max(MIN_INTERVAL_DAYS, min(params.maximum_interval, interval))
