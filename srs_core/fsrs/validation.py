"""
Input validation for review events.

Ratings and item keys are checked before any storage access; nothing here
coerces a bad value into a valid one.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from srs_core.fsrs.constants import Rating
from srs_core.fsrs.errors import InvalidRatingError, InvalidReviewKeyError


MAX_USER_ID_LENGTH = 255
MAX_ITEM_TYPE_LENGTH = 50
MAX_ITEM_KEY_LENGTH = 100
MAX_ITEM_NAME_LENGTH = 200


def parse_rating(value: object) -> Rating:
    """
    Convert an integer rating to Rating.

    Raises:
        InvalidRatingError: value is not an int in {1, 2, 3, 4}
    """
    # bool is an int subclass; True must not pass as Again
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRatingError(value)
    try:
        return Rating(value)
    except ValueError:
        raise InvalidRatingError(value) from None


class ReviewRequest(BaseModel):
    """A single rating event as supplied by a caller."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    user_id: str = Field(min_length=1, max_length=MAX_USER_ID_LENGTH)
    item_type: str = Field(min_length=1, max_length=MAX_ITEM_TYPE_LENGTH)
    item_key: str = Field(min_length=1, max_length=MAX_ITEM_KEY_LENGTH)
    item_name: Optional[str] = None

    @field_validator("item_name")
    @classmethod
    def _trim_name(cls, value: Optional[str]) -> Optional[str]:
        # Display labels are truncated, never rejected
        if value is None:
            return None
        return value[:MAX_ITEM_NAME_LENGTH] or None

    @property
    def display_name(self) -> str:
        return self.item_name or self.item_key


def build_review_request(
    user_id: str,
    item_type: str,
    item_key: str,
    item_name: Optional[str] = None
) -> ReviewRequest:
    """
    Validate the composite key of a review event.

    Raises:
        InvalidReviewKeyError: a key field is missing, empty or too long
    """
    try:
        return ReviewRequest(
            user_id=user_id,
            item_type=item_type,
            item_key=item_key,
            item_name=item_name,
        )
    except ValidationError as exc:
        raise InvalidReviewKeyError(str(exc)) from exc
