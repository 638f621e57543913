"""
Recorder - Review Event Orchestration

Main write path of the review engine.

Workflow:
1. Validate the rating and composite key (before any storage access)
2. Load the stored item, or treat it as new
3. Schedule the rating against the loaded state
4. Persist with a compare-and-swap write

If another writer updates the same item between steps 2 and 4, nothing is
written; the item is re-read and the rating is scheduled again against the
winner's state, so concurrent ratings apply one after the other.
"""

from __future__ import annotations
import dataclasses
import logging
from datetime import datetime
from typing import Callable, Optional

from srs_core.fsrs.constants import DEFAULT_MAX_WRITE_ATTEMPTS, Rating
from srs_core.fsrs.errors import ConcurrentReviewError
from srs_core.fsrs.memory_state import ReviewItem, SchedulingResult, utcnow
from srs_core.fsrs.parameters import DEFAULT_PARAMETERS, SchedulerParameters
from srs_core.fsrs.scheduler import schedule
from srs_core.fsrs.store import ReviewItemStore
from srs_core.fsrs.validation import ReviewRequest, build_review_request, parse_rating

logger = logging.getLogger(__name__)


class ReviewRecorder:
    """Load-or-initialize, schedule and persist one rating event."""

    def __init__(
        self,
        store: ReviewItemStore,
        params: SchedulerParameters = DEFAULT_PARAMETERS,
        clock: Callable[[], datetime] = utcnow,
        max_write_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS
    ):
        if max_write_attempts < 1:
            raise ValueError("max_write_attempts must be at least 1")
        self.store = store
        self.params = params
        self.clock = clock
        self.max_write_attempts = max_write_attempts

    def record_review(
        self,
        user_id: str,
        item_type: str,
        item_key: str,
        item_name: Optional[str],
        rating: Rating
    ) -> ReviewItem:
        """
        Record a rating and reschedule the item.

        Args:
            user_id: User identifier
            item_type: Item category (e.g. "scale", "technique")
            item_key: Stable identifier within the type
            item_name: Display label; None keeps the stored label
            rating: AGAIN, HARD, GOOD or EASY

        Returns:
            The persisted ReviewItem

        Raises:
            InvalidRatingError: rating outside {1, 2, 3, 4}
            InvalidReviewKeyError: empty or over-long key fields
            ConcurrentReviewError: the item kept changing underneath us
        """
        rating = parse_rating(rating)
        request = build_review_request(user_id, item_type, item_key, item_name)

        attempt = 0
        while True:
            attempt += 1
            existing = self.store.find(request.user_id, request.item_type, request.item_key)
            now = self._now()
            result = schedule(existing, rating, now, self.params)
            item = _apply_result(existing, request, rating, result, now)

            try:
                stored = self.store.upsert(item)
            except ConcurrentReviewError:
                if attempt == self.max_write_attempts:
                    raise
                logger.warning(
                    "Concurrent update of %s/%s/%s, re-reading (attempt %d of %d)",
                    request.user_id, request.item_type, request.item_key,
                    attempt, self.max_write_attempts
                )
                continue

            logger.info(
                "Recorded review %s/%s/%s rating=%d reps=%d lapses=%d next=%s (%dd)",
                stored.user_id, stored.item_type, stored.item_key, rating,
                stored.repetitions, stored.lapses,
                stored.next_review.isoformat(), result.interval_days
            )
            return stored

    def _now(self) -> datetime:
        now = self.clock()
        if now.tzinfo is None:
            raise ValueError("clock returned a naive datetime; review timestamps must be timezone-aware")
        return now


def _apply_result(
    existing: Optional[ReviewItem],
    request: ReviewRequest,
    rating: Rating,
    result: SchedulingResult,
    now: datetime
) -> ReviewItem:
    """Build the item to persist from the stored one and a scheduling result."""
    lapse = 1 if rating == Rating.AGAIN else 0
    state = result.new_state

    if existing is None:
        return ReviewItem(
            user_id=request.user_id,
            item_type=request.item_type,
            item_key=request.item_key,
            item_name=request.display_name,
            difficulty=state.difficulty,
            stability=state.stability,
            retrievability=state.retrievability,
            last_review=now,
            next_review=result.next_review,
            repetitions=1,
            lapses=lapse,
        )

    return dataclasses.replace(
        existing,
        item_name=request.item_name or existing.item_name,
        difficulty=state.difficulty,
        stability=state.stability,
        retrievability=state.retrievability,
        last_review=now,
        next_review=result.next_review,
        repetitions=existing.repetitions + 1,
        lapses=existing.lapses + lapse,
    )
