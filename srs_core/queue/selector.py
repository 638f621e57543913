"""
Read-only review queue views: due, upcoming and stats.

Reads are snapshots; an item rescheduled a moment ago may still show up as
due. Nothing here writes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from srs_core.fsrs.constants import (
    DEFAULT_QUEUE_LIMIT,
    DEFAULT_UPCOMING_DAYS,
    STATS_WEEK_DAYS,
)
from srs_core.fsrs.errors import InvalidReviewError
from srs_core.fsrs.memory_model import round_half_up
from srs_core.fsrs.memory_state import (
    RetrievabilityFn,
    ReviewItem,
    add_days,
    end_of_day,
    utcnow,
)
from srs_core.fsrs.store import ReviewItemStore
from srs_core.queue.types import ReviewStats

logger = logging.getLogger(__name__)


def _require_non_negative(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidReviewError(f"{name} must be a non-negative integer, got {value!r}")


class QueueSelector:
    """
    Due / upcoming / stats queries over one store.

    tie_break chooses the retrievability used to order items due at the same
    moment. None keeps the stored snapshot and lets the store do the ordering;
    passing memory_state.live_retrievability re-ranks by recall probability
    recomputed for the current moment.
    """

    def __init__(
        self,
        store: ReviewItemStore,
        clock: Callable[[], datetime] = utcnow,
        tie_break: Optional[RetrievabilityFn] = None
    ):
        self.store = store
        self.clock = clock
        self.tie_break = tie_break

    def get_review_queue(self, user_id: str, limit: int = DEFAULT_QUEUE_LIMIT) -> list[ReviewItem]:
        """
        Items due now, most overdue first, weakest memory first on ties.

        Args:
            user_id: User identifier
            limit: Maximum number of items

        Returns:
            At most limit due items
        """
        _require_non_negative("limit", limit)
        now = self.clock()

        if self.tie_break is None:
            return self.store.query_due(user_id, now, limit)

        due = self.store.query_due(user_id, now, None)
        due.sort(key=lambda item: (item.next_review, self.tie_break(item, now)))
        return due[:limit]

    def get_upcoming_reviews(self, user_id: str, days: int = DEFAULT_UPCOMING_DAYS) -> list[ReviewItem]:
        """
        Items coming due within the next days, excluding anything already due.
        """
        _require_non_negative("days", days)
        now = self.clock()
        return self.store.query_upcoming(user_id, now, add_days(now, days))

    def get_review_stats(self, user_id: str) -> ReviewStats:
        """
        Due counts and average stored retention for a user.

        due_today counts everything due by the end of the current day
        (overdue items included); due_this_week everything due within 7 days.
        """
        now = self.clock()
        today_end = end_of_day(now)
        week_end = add_days(now, STATS_WEEK_DAYS)

        items = self.store.query_all(user_id)
        due_today = sum(1 for item in items if item.next_review <= today_end)
        due_this_week = sum(1 for item in items if item.next_review <= week_end)

        if items:
            mean = sum(item.retrievability for item in items) / len(items)
            avg_retention = round_half_up(mean * 100)
        else:
            avg_retention = 0

        stats = ReviewStats(
            due_today=due_today,
            due_this_week=due_this_week,
            total_items=len(items),
            avg_retention=avg_retention,
        )
        logger.debug("Review stats for %s: %s", user_id, stats)
        return stats
