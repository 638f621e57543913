"""Test helpers: a fixed clock and review item builders."""

from datetime import datetime, timedelta, timezone

from srs_core.fsrs.memory_state import ReviewItem

T0 = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def make_item(
    next_review: datetime,
    item_key: str = "d-major",
    user_id: str = "user-1",
    item_type: str = "scale",
    retrievability: float = 0.9,
    last_review=None,
    stability: float = 2.4,
    difficulty: float = 4.93,
    repetitions: int = 1,
    lapses: int = 0,
) -> ReviewItem:
    return ReviewItem(
        user_id=user_id,
        item_type=item_type,
        item_key=item_key,
        item_name=item_key.replace("-", " ").title(),
        difficulty=difficulty,
        stability=stability,
        retrievability=retrievability,
        last_review=last_review if last_review is not None else next_review - timedelta(days=2),
        next_review=next_review,
        repetitions=repetitions,
        lapses=lapses,
    )
