"""
Scheduler - FSRS Algorithm Logic

Pure FSRS scheduling (no database calls).

Main workflow:
1. Decide whether the item is New or Seen
2. For Seen items, compute retrievability right before this recall attempt
3. Apply the initial, recall or forget update rules
4. Return the new memory state and next review date

Loading and persisting the item is the caller's responsibility.
"""

from __future__ import annotations
import logging
import math
from datetime import datetime
from typing import Optional

from srs_core.fsrs import memory_model
from srs_core.fsrs.constants import MIN_INTERVAL_DAYS, Rating
from srs_core.fsrs.errors import NumericDegeneracyError
from srs_core.fsrs.memory_state import (
    MemoryState,
    ReviewItem,
    SchedulingResult,
    add_days,
    days_between,
    utcnow,
)
from srs_core.fsrs.parameters import DEFAULT_PARAMETERS, SchedulerParameters
from srs_core.fsrs.validation import parse_rating

logger = logging.getLogger(__name__)


def schedule(
    prior: Optional[ReviewItem],
    rating: Rating,
    now: Optional[datetime] = None,
    params: SchedulerParameters = DEFAULT_PARAMETERS
) -> SchedulingResult:
    """
    Compute the new memory state and next review date for a rating event.

    Args:
        prior: Stored item, or None for a never-seen item
        rating: User feedback (AGAIN, HARD, GOOD, EASY)
        now: Review timestamp (defaults to now, UTC)
        params: Weight vector and policy knobs

    Returns:
        SchedulingResult with next_review, interval_days and new_state

    Raises:
        InvalidRatingError: rating outside {1, 2, 3, 4}
        NumericDegeneracyError: prior state is corrupted or the math
            produced a non-finite value
    """
    rating = parse_rating(rating)
    if now is None:
        now = utcnow()

    if prior is None or prior.is_new:
        state, interval = _schedule_new(rating, params)
    else:
        state, interval = _schedule_seen(prior, rating, now, params)

    _check_finite(state)
    logger.debug(
        "Scheduled rating=%d: D=%.3f S=%.3f R=%.3f interval=%dd",
        rating, state.difficulty, state.stability, state.retrievability, interval
    )
    return SchedulingResult(
        next_review=add_days(now, interval),
        interval_days=interval,
        new_state=state,
    )


def _schedule_new(
    rating: Rating,
    params: SchedulerParameters
) -> tuple[MemoryState, int]:
    stability = memory_model.init_stability(rating, params)
    difficulty = memory_model.init_difficulty(rating, params)

    # A first-ever Again is not trusted with its seeded stability
    if rating == Rating.AGAIN:
        interval = MIN_INTERVAL_DAYS
    else:
        interval = memory_model.next_interval(stability, params)

    return MemoryState(difficulty=difficulty, stability=stability, retrievability=1.0), interval


def _schedule_seen(
    prior: ReviewItem,
    rating: Rating,
    now: datetime,
    params: SchedulerParameters
) -> tuple[MemoryState, int]:
    _check_prior(prior)

    elapsed = days_between(prior.last_review, now)
    current_r = memory_model.retrievability(elapsed, prior.stability)

    if rating == Rating.AGAIN:
        stability = memory_model.next_forget_stability(
            prior.difficulty, prior.stability, current_r, params
        )
    else:
        stability = memory_model.next_recall_stability(
            prior.difficulty, prior.stability, current_r, rating, params
        )
    difficulty = memory_model.next_difficulty(prior.difficulty, rating, params)

    if not math.isfinite(stability):
        raise NumericDegeneracyError(f"stability update produced {stability}")

    if rating == Rating.AGAIN:
        interval = MIN_INTERVAL_DAYS
    else:
        interval = memory_model.next_interval(stability, params)

    # Stored R is the prediction at the moment of this review, lapse or not
    return MemoryState(difficulty=difficulty, stability=stability, retrievability=current_r), interval


def _check_prior(prior: ReviewItem):
    """Reject stored state the formulas are undefined for."""
    if not math.isfinite(prior.stability) or prior.stability <= 0:
        raise NumericDegeneracyError(
            f"stored stability {prior.stability} for {'/'.join(prior.key)} is not a positive finite number"
        )
    if not math.isfinite(prior.difficulty) or prior.difficulty <= 0:
        raise NumericDegeneracyError(
            f"stored difficulty {prior.difficulty} for {'/'.join(prior.key)} is not a positive finite number"
        )


def _check_finite(state: MemoryState):
    for name in ("difficulty", "stability", "retrievability"):
        value = getattr(state, name)
        if not math.isfinite(value):
            raise NumericDegeneracyError(f"{name} is {value}")
