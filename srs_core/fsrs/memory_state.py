"""
Memory State - Review Item State and Retrievability

Defines the persisted review item, the scheduler's result type and the
time-dependent helpers built on the forgetting curve.

The retrievability stored on an item is a snapshot taken at its last review.
Anything that needs "how likely is recall right now" goes through
live_retrievability instead of trusting the stored field.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from srs_core.fsrs import memory_model


SECONDS_PER_DAY = 86400.0


@dataclass
class ReviewItem:
    """
    Memory state for a single practice item.

    An item is defined as: (user_id, item_type, item_key)
    """
    user_id: str
    item_type: str
    item_key: str
    item_name: str

    # Memory parameters
    difficulty: float  # D, range 1-10
    stability: float  # S, in days
    retrievability: float  # R snapshot from the last review

    # Scheduling timestamps (timezone-aware)
    last_review: Optional[datetime]
    next_review: datetime

    # Review tracking
    repetitions: int = 0
    lapses: int = 0

    # Row version for compare-and-swap writes (0 = not yet persisted)
    version: int = 0

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.user_id, self.item_type, self.item_key)

    @property
    def is_new(self) -> bool:
        """True if the item has never been rated."""
        return self.repetitions == 0 or self.last_review is None


@dataclass(frozen=True)
class MemoryState:
    difficulty: float
    stability: float
    retrievability: float


@dataclass(frozen=True)
class SchedulingResult:
    """Outcome of scheduling one rating event."""
    next_review: datetime
    interval_days: int
    new_state: MemoryState


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_between(start: datetime, end: datetime) -> float:
    """
    Fractional days from start to end, floored at 0.

    A review timestamped before the recorded last review (clock skew) counts
    as zero elapsed time.
    """
    delta = (end - start).total_seconds() / SECONDS_PER_DAY
    return max(0.0, delta)


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def end_of_day(moment: datetime) -> datetime:
    """Last representable instant of moment's calendar day, in moment's timezone."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def snapshot_retrievability(item: ReviewItem, now: datetime) -> float:
    """Retrievability as stored at the item's last review."""
    return item.retrievability


def live_retrievability(item: ReviewItem, now: datetime) -> float:
    """
    Retrievability recomputed for the current moment.

    Formula: R = (1 + Δt / (9 * S))^-1, with Δt = now - last_review.

    Never-reviewed items report 1.0.
    """
    if item.last_review is None:
        return 1.0
    return memory_model.retrievability(days_between(item.last_review, now), item.stability)


RetrievabilityFn = Callable[[ReviewItem, datetime], float]
