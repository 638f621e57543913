"""
Tests for the review queue views

Due queue, upcoming window and aggregate stats.
"""

from datetime import timedelta, timezone, datetime

import pytest

from srs_core.fsrs.constants import Rating
from srs_core.fsrs.errors import InvalidReviewError
from srs_core.fsrs.memory_state import live_retrievability, snapshot_retrievability
from srs_core.queue import QueueSelector, ReviewStats
from srs_core.service import ReviewService

from tests.helpers import T0, make_item


def seed(store, *offsets_in_days, **overrides):
    for i, offset in enumerate(offsets_in_days):
        store.upsert(make_item(next_review=T0 + timedelta(days=offset), item_key=f"item-{i}", **overrides))


class TestReviewQueue:
    """get_review_queue"""

    def test_returns_due_items_most_overdue_first(self, store, selector):
        seed(store, -1, 3, -2)

        queue = selector.get_review_queue("user-1", 10)

        assert [item.item_key for item in queue] == ["item-2", "item-0"]

    def test_respects_limit(self, store, selector):
        seed(store, -5, -4, -3, -2, -1)
        queue = selector.get_review_queue("user-1", 2)
        assert [item.item_key for item in queue] == ["item-0", "item-1"]

    def test_zero_limit_is_empty(self, store, selector):
        seed(store, -1)
        assert selector.get_review_queue("user-1", 0) == []

    def test_weakest_first_on_ties(self, store, selector):
        due = T0 - timedelta(days=1)
        store.upsert(make_item(next_review=due, item_key="strong", retrievability=0.95))
        store.upsert(make_item(next_review=due, item_key="weak", retrievability=0.4))

        queue = selector.get_review_queue("user-1")
        assert [item.item_key for item in queue] == ["weak", "strong"]

    def test_other_users_not_included(self, store, selector):
        seed(store, -1, user_id="user-2")
        assert selector.get_review_queue("user-1") == []

    @pytest.mark.parametrize("limit", [-1, True, 2.5])
    def test_rejects_bad_limit(self, selector, limit):
        with pytest.raises(InvalidReviewError):
            selector.get_review_queue("user-1", limit)


class TestLiveTieBreak:
    """Re-ranking ties by recall probability at query time"""

    def test_live_ordering_differs_from_snapshot(self, store, clock):
        due = T0 - timedelta(days=1)
        # Stored snapshot says "durable" is weaker; its stability says otherwise
        store.upsert(make_item(next_review=due, item_key="durable", retrievability=0.3, stability=1000.0))
        store.upsert(make_item(next_review=due, item_key="fragile", retrievability=0.9, stability=0.1))

        snapshot = QueueSelector(store, clock=clock)
        live = QueueSelector(store, clock=clock, tie_break=live_retrievability)

        assert [i.item_key for i in snapshot.get_review_queue("user-1")] == ["durable", "fragile"]
        assert [i.item_key for i in live.get_review_queue("user-1")] == ["fragile", "durable"]

    def test_snapshot_function_matches_store_order(self, store, clock):
        due = T0 - timedelta(days=1)
        store.upsert(make_item(next_review=due, item_key="b", retrievability=0.7))
        store.upsert(make_item(next_review=due, item_key="a", retrievability=0.2))

        explicit = QueueSelector(store, clock=clock, tie_break=snapshot_retrievability)
        default = QueueSelector(store, clock=clock)
        assert explicit.get_review_queue("user-1") == default.get_review_queue("user-1")

    def test_live_still_orders_by_due_date_first(self, store, clock):
        store.upsert(make_item(next_review=T0 - timedelta(days=1), item_key="recent", stability=0.1))
        store.upsert(make_item(next_review=T0 - timedelta(days=3), item_key="older", stability=1000.0))

        live = QueueSelector(store, clock=clock, tie_break=live_retrievability)
        queue = live.get_review_queue("user-1", 1)
        assert [i.item_key for i in queue] == ["older"]


class TestUpcoming:
    """get_upcoming_reviews"""

    def test_window_excludes_due_items(self, store, selector):
        seed(store, -1, 0, 2, 6, 8)
        upcoming = selector.get_upcoming_reviews("user-1", 7)
        assert [item.item_key for item in upcoming] == ["item-2", "item-3"]

    def test_window_end_is_inclusive(self, store, selector):
        seed(store, 7)
        assert len(selector.get_upcoming_reviews("user-1", 7)) == 1

    def test_zero_days_is_empty(self, store, selector):
        seed(store, 1)
        assert selector.get_upcoming_reviews("user-1", 0) == []

    def test_rejects_negative_days(self, selector):
        with pytest.raises(InvalidReviewError):
            selector.get_upcoming_reviews("user-1", -3)


class TestStats:
    """get_review_stats"""

    def test_counts(self, store, selector):
        seed(store, -1, 2, 10, 40)

        stats = selector.get_review_stats("user-1")

        assert stats == ReviewStats(due_today=1, due_this_week=2, total_items=4, avg_retention=90)

    def test_due_today_includes_rest_of_day(self, store, selector):
        # T0 is noon; 11 hours later is still today, 13 hours later is not
        store.upsert(make_item(next_review=T0 + timedelta(hours=11), item_key="tonight"))
        store.upsert(make_item(next_review=T0 + timedelta(hours=13), item_key="tomorrow"))

        stats = selector.get_review_stats("user-1")
        assert stats.due_today == 1
        assert stats.due_this_week == 2

    def test_end_of_day_follows_clock_timezone(self, store):
        minus_five = timezone(timedelta(hours=-5))
        local_now = datetime(2026, 3, 10, 20, 0, tzinfo=minus_five)
        # 23:30 local is still today there, though it is already tomorrow in UTC
        store.upsert(make_item(next_review=local_now + timedelta(hours=3, minutes=30)))

        stats = QueueSelector(store, clock=lambda: local_now).get_review_stats("user-1")
        assert stats.due_today == 1

    def test_avg_retention_rounds_half_up(self, store, selector):
        store.upsert(make_item(next_review=T0, item_key="a", retrievability=0.75))
        store.upsert(make_item(next_review=T0, item_key="b", retrievability=1.0))
        assert selector.get_review_stats("user-1").avg_retention == 88

    def test_empty_user(self, selector):
        assert selector.get_review_stats("nobody") == ReviewStats(
            due_today=0, due_this_week=0, total_items=0, avg_retention=0
        )


class TestReviewService:
    """Service facade wires recorder and selector to one store and clock"""

    def test_record_then_query(self, store, clock):
        service = ReviewService(store, clock=clock)

        service.record_review("user-1", "scale", "d-major", "D major", Rating.AGAIN)
        service.record_review("user-1", "technique", "legato", "Legato", Rating.EASY)

        assert service.get_review_queue("user-1") == []

        clock.advance(days=1)
        queue = service.get_review_queue("user-1")
        assert [item.item_key for item in queue] == ["d-major"]

        upcoming = service.get_upcoming_reviews("user-1", 7)
        assert [item.item_key for item in upcoming] == ["legato"]

        stats = service.get_review_stats("user-1")
        assert stats.total_items == 2
        assert stats.avg_retention == 100

    def test_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SRS_WEIGHTS", raising=False)
        monkeypatch.setenv("SRS_MAXIMUM_INTERVAL", "120")
        monkeypatch.setenv("SRS_MAX_WRITE_ATTEMPTS", "5")

        service = ReviewService.from_environment(f"sqlite:///{tmp_path / 'env.sqlite'}")

        assert service.recorder.params.maximum_interval == 120
        assert service.recorder.max_write_attempts == 5
        item = service.record_review("user-1", "scale", "d-major", None, Rating.GOOD)
        assert item.version == 1
