"""Shared fixtures for review engine tests."""

import pytest

from srs_core.fsrs.database import get_engine, init_db
from srs_core.fsrs.recorder import ReviewRecorder
from srs_core.fsrs.store import SqlAlchemyReviewItemStore
from srs_core.queue.selector import QueueSelector

from tests.helpers import FixedClock


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def engine(tmp_path):
    """SQLite engine on a fresh temporary database"""
    engine = get_engine(f"sqlite:///{tmp_path / 'reviews.sqlite'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return SqlAlchemyReviewItemStore(engine)


@pytest.fixture
def recorder(store, clock):
    return ReviewRecorder(store, clock=clock)


@pytest.fixture
def selector(store, clock):
    return QueueSelector(store, clock=clock)
