"""
Review queue package exports.
"""

from srs_core.queue.selector import QueueSelector
from srs_core.queue.types import ReviewStats

__all__ = [
    "QueueSelector",
    "ReviewStats",
]
