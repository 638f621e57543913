"""
FSRS - Free Spaced Repetition Scheduler

Review scheduling engine for practice items (scales, exercises, techniques).

This package implements:
- A closed-form memory model: R = (1 + t / (9 * S))^-1
- Scheduling for never-seen and previously-seen items
- A review recorder that persists state with compare-and-swap writes

Quick start:
    from srs_core import fsrs

    engine = fsrs.get_engine("sqlite:///reviews.sqlite")
    fsrs.init_db(engine)
    recorder = fsrs.ReviewRecorder(fsrs.SqlAlchemyReviewItemStore(engine))

    item = recorder.record_review("user-1", "scale", "d-major", "D major", fsrs.Rating.GOOD)

    # Pure scheduling, no database
    result = fsrs.schedule(None, fsrs.Rating.GOOD)
"""

# Core scheduler API (algorithm logic)
from srs_core.fsrs.scheduler import schedule

# Memory model
from srs_core.fsrs.memory_model import (
    init_stability,
    init_difficulty,
    next_difficulty,
    retrievability,
    next_recall_stability,
    next_forget_stability,
    next_interval,
)

# Memory state
from srs_core.fsrs.memory_state import (
    ReviewItem,
    MemoryState,
    SchedulingResult,
    live_retrievability,
    snapshot_retrievability,
)

# Constants and parameters
from srs_core.fsrs.constants import Rating, RATING_LABELS, DEFAULT_WEIGHTS
from srs_core.fsrs.parameters import SchedulerParameters, DEFAULT_PARAMETERS, load_parameters

# Errors
from srs_core.fsrs.errors import (
    ReviewEngineError,
    InvalidReviewError,
    InvalidRatingError,
    InvalidReviewKeyError,
    ConcurrentReviewError,
    NumericDegeneracyError,
)

# Database and store
from srs_core.fsrs.database import get_engine, init_db, reset_db, is_test_mode
from srs_core.fsrs.store import ReviewItemStore, SqlAlchemyReviewItemStore

# Write path
from srs_core.fsrs.recorder import ReviewRecorder


__all__ = [
    # Core algorithm
    "schedule",
    "init_stability",
    "init_difficulty",
    "next_difficulty",
    "retrievability",
    "next_recall_stability",
    "next_forget_stability",
    "next_interval",

    # Memory state
    "ReviewItem",
    "MemoryState",
    "SchedulingResult",
    "live_retrievability",
    "snapshot_retrievability",

    # Parameters
    "Rating",
    "RATING_LABELS",
    "DEFAULT_WEIGHTS",
    "SchedulerParameters",
    "DEFAULT_PARAMETERS",
    "load_parameters",

    # Errors
    "ReviewEngineError",
    "InvalidReviewError",
    "InvalidRatingError",
    "InvalidReviewKeyError",
    "ConcurrentReviewError",
    "NumericDegeneracyError",

    # Database operations
    "get_engine",
    "init_db",
    "reset_db",
    "is_test_mode",
    "ReviewItemStore",
    "SqlAlchemyReviewItemStore",

    "ReviewRecorder",
]
