"""
Exceptions raised by the review engine.
"""

from __future__ import annotations


class ReviewEngineError(Exception):
    """Base class for review engine errors."""


class InvalidReviewError(ReviewEngineError, ValueError):
    """Caller input was rejected before touching storage."""


class InvalidRatingError(InvalidReviewError):
    """Rating is not one of 1 (Again), 2 (Hard), 3 (Good), 4 (Easy)."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"invalid rating: {rating!r} (expected 1, 2, 3 or 4)")


class InvalidReviewKeyError(InvalidReviewError):
    """user_id / item_type / item_key is empty or malformed."""


class ConcurrentReviewError(ReviewEngineError, RuntimeError):
    """Another writer updated the same review item since it was read."""

    def __init__(self, user_id: str, item_type: str, item_key: str):
        self.key = (user_id, item_type, item_key)
        super().__init__(
            f"review item {user_id}/{item_type}/{item_key} was modified concurrently"
        )


class NumericDegeneracyError(ReviewEngineError, ArithmeticError):
    """Memory model produced or was fed a non-finite or non-positive value."""
