"""
Service layer exposing the review engine to the rest of the application.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from srs_core.fsrs.constants import (
    DEFAULT_MAX_WRITE_ATTEMPTS,
    DEFAULT_QUEUE_LIMIT,
    DEFAULT_UPCOMING_DAYS,
    Rating,
)
from srs_core.fsrs.database import get_engine, init_db
from srs_core.fsrs.memory_state import RetrievabilityFn, ReviewItem, utcnow
from srs_core.fsrs.parameters import (
    DEFAULT_PARAMETERS,
    SchedulerParameters,
    get_max_write_attempts,
    load_parameters,
)
from srs_core.fsrs.recorder import ReviewRecorder
from srs_core.fsrs.store import ReviewItemStore, SqlAlchemyReviewItemStore
from srs_core.queue.selector import QueueSelector
from srs_core.queue.types import ReviewStats


class ReviewService:
    """
    record_review / get_review_queue / get_upcoming_reviews / get_review_stats
    over a single store, parameter set and clock.
    """

    def __init__(
        self,
        store: ReviewItemStore,
        params: SchedulerParameters = DEFAULT_PARAMETERS,
        clock: Callable[[], datetime] = utcnow,
        tie_break: Optional[RetrievabilityFn] = None,
        max_write_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS
    ):
        self.store = store
        self.recorder = ReviewRecorder(store, params, clock, max_write_attempts)
        self.selector = QueueSelector(store, clock, tie_break)

    @classmethod
    def from_environment(cls, database_url: Optional[str] = None) -> "ReviewService":
        """
        Build a service from DATABASE_URL and the SRS_* environment variables,
        creating the schema if needed.
        """
        engine = get_engine(database_url)
        init_db(engine)
        return cls(
            SqlAlchemyReviewItemStore(engine),
            params=load_parameters(),
            max_write_attempts=get_max_write_attempts(),
        )

    def record_review(
        self,
        user_id: str,
        item_type: str,
        item_key: str,
        item_name: Optional[str],
        rating: Rating
    ) -> ReviewItem:
        return self.recorder.record_review(user_id, item_type, item_key, item_name, rating)

    def get_review_queue(self, user_id: str, limit: int = DEFAULT_QUEUE_LIMIT) -> list[ReviewItem]:
        return self.selector.get_review_queue(user_id, limit)

    def get_upcoming_reviews(self, user_id: str, days: int = DEFAULT_UPCOMING_DAYS) -> list[ReviewItem]:
        return self.selector.get_upcoming_reviews(user_id, days)

    def get_review_stats(self, user_id: str) -> ReviewStats:
        return self.selector.get_review_stats(user_id)
