"""
Store - Review Item Persistence

ReviewItemStore is the contract the engine consumes; SqlAlchemyReviewItemStore
is the shipped implementation.

Writes are atomic per composite key: an update only lands if the row still
carries the version it was read with (compare-and-swap), and a first insert
relies on the (user_id, item_type, item_key) unique constraint. Losing either
race raises ConcurrentReviewError and writes nothing.
"""

from __future__ import annotations
import dataclasses
import logging
from datetime import datetime
from typing import Optional, Protocol

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from srs_core.fsrs.database import session_factory
from srs_core.fsrs.errors import ConcurrentReviewError
from srs_core.fsrs.memory_state import ReviewItem
from srs_core.fsrs.models import ReviewItemRow

logger = logging.getLogger(__name__)


class ReviewItemStore(Protocol):
    """Persistence contract for review items."""

    def find(self, user_id: str, item_type: str, item_key: str) -> Optional[ReviewItem]:
        ...

    def upsert(self, item: ReviewItem) -> ReviewItem:
        ...

    def query_due(self, user_id: str, now: datetime, limit: Optional[int]) -> list[ReviewItem]:
        ...

    def query_upcoming(self, user_id: str, now: datetime, window_end: datetime) -> list[ReviewItem]:
        ...

    def query_all(self, user_id: str) -> list[ReviewItem]:
        ...


def _to_domain(row: ReviewItemRow) -> ReviewItem:
    return ReviewItem(
        user_id=row.user_id,
        item_type=row.item_type,
        item_key=row.item_key,
        item_name=row.item_name,
        difficulty=row.difficulty,
        stability=row.stability,
        retrievability=row.retrievability,
        last_review=row.last_review,
        next_review=row.next_review,
        repetitions=row.repetitions,
        lapses=row.lapses,
        version=row.version,
    )


def _state_values(item: ReviewItem) -> dict:
    return {
        "item_name": item.item_name,
        "difficulty": item.difficulty,
        "stability": item.stability,
        "retrievability": item.retrievability,
        "last_review": item.last_review,
        "next_review": item.next_review,
        "repetitions": item.repetitions,
        "lapses": item.lapses,
    }


def _key_filter(user_id: str, item_type: str, item_key: str):
    return (
        ReviewItemRow.user_id == user_id,
        ReviewItemRow.item_type == item_type,
        ReviewItemRow.item_key == item_key,
    )


class SqlAlchemyReviewItemStore:
    """
    Review item store backed by a SQLAlchemy engine.

    Every call opens its own session and closes it before returning, so the
    store is safe to share between threads.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = session_factory(engine)

    def find(self, user_id: str, item_type: str, item_key: str) -> Optional[ReviewItem]:
        """
        Load an item by composite key.

        Returns:
            ReviewItem if found, None if never reviewed
        """
        session = self._session_factory()
        try:
            row = session.execute(
                select(ReviewItemRow).where(*_key_filter(user_id, item_type, item_key))
            ).scalar_one_or_none()
            return _to_domain(row) if row is not None else None
        finally:
            session.close()

    def upsert(self, item: ReviewItem) -> ReviewItem:
        """
        Insert a new item (version 0) or compare-and-swap an existing one.

        Returns:
            The stored item with its new version

        Raises:
            ConcurrentReviewError: another writer got there first
        """
        if item.version == 0:
            return self._insert(item)
        return self._update(item)

    def _insert(self, item: ReviewItem) -> ReviewItem:
        session = self._session_factory()
        try:
            session.add(ReviewItemRow(
                user_id=item.user_id,
                item_type=item.item_type,
                item_key=item.item_key,
                version=1,
                **_state_values(item)
            ))
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            # Only a row that now exists under the same key means we lost a race
            if self.find(*item.key) is not None:
                raise ConcurrentReviewError(*item.key) from exc
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        return dataclasses.replace(item, version=1)

    def _update(self, item: ReviewItem) -> ReviewItem:
        new_version = item.version + 1
        session = self._session_factory()
        try:
            result = session.execute(
                update(ReviewItemRow)
                .where(
                    *_key_filter(*item.key),
                    ReviewItemRow.version == item.version,
                )
                .values(version=new_version, **_state_values(item))
            )
            if result.rowcount != 1:
                raise ConcurrentReviewError(*item.key)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        return dataclasses.replace(item, version=new_version)

    def query_due(
        self,
        user_id: str,
        now: datetime,
        limit: Optional[int] = None
    ) -> list[ReviewItem]:
        """
        Items with next_review <= now.

        Ordered by next_review (most overdue first), then by stored
        retrievability (weakest first). limit=None returns every due item.
        """
        stmt = (
            select(ReviewItemRow)
            .where(ReviewItemRow.user_id == user_id, ReviewItemRow.next_review <= now)
            .order_by(
                ReviewItemRow.next_review.asc(),
                ReviewItemRow.retrievability.asc(),
                ReviewItemRow.id.asc(),
            )
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._fetch(stmt)

    def query_upcoming(
        self,
        user_id: str,
        now: datetime,
        window_end: datetime
    ) -> list[ReviewItem]:
        """Items with now < next_review <= window_end, soonest first."""
        stmt = (
            select(ReviewItemRow)
            .where(
                ReviewItemRow.user_id == user_id,
                ReviewItemRow.next_review > now,
                ReviewItemRow.next_review <= window_end,
            )
            .order_by(ReviewItemRow.next_review.asc(), ReviewItemRow.id.asc())
        )
        return self._fetch(stmt)

    def query_all(self, user_id: str) -> list[ReviewItem]:
        """Every item for a user, soonest due first."""
        stmt = (
            select(ReviewItemRow)
            .where(ReviewItemRow.user_id == user_id)
            .order_by(ReviewItemRow.next_review.asc(), ReviewItemRow.id.asc())
        )
        return self._fetch(stmt)

    def _fetch(self, stmt) -> list[ReviewItem]:
        session = self._session_factory()
        try:
            return [_to_domain(row) for row in session.execute(stmt).scalars()]
        finally:
            session.close()
