"""
Types for review queue views.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReviewStats:
    """
    Aggregate review counts for one user.

    avg_retention is the mean stored retrievability as a whole percentage.
    """
    due_today: int
    due_this_week: int
    total_items: int
    avg_retention: int
