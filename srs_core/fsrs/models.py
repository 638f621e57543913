"""
SQLAlchemy ORM Models for the Review Item Store

Defines the review_items table: one row per (user_id, item_type, item_key).
"""

from datetime import timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime stored as naive UTC.

    SQLite drops tzinfo on the way out; storing UTC and re-attaching it on
    load keeps timestamps exact on every backend.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"naive datetime {value!r}; review timestamps must be timezone-aware")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class ReviewItemRow(Base):
    """
    Persistent memory state for a single practice item.
    """
    __tablename__ = 'review_items'
    __table_args__ = (
        UniqueConstraint('user_id', 'item_type', 'item_key', name='uq_review_items_key'),
        Index('ix_review_items_user_next_review', 'user_id', 'next_review'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Composite key
    user_id = Column(String(255), nullable=False)
    item_type = Column(String(50), nullable=False)
    item_key = Column(String(100), nullable=False)

    item_name = Column(String(200), nullable=False)

    # Memory parameters
    difficulty = Column(Float, nullable=False)
    stability = Column(Float, nullable=False)
    retrievability = Column(Float, nullable=False, default=1.0)

    # Scheduling
    last_review = Column(UTCDateTime, nullable=True)
    next_review = Column(UTCDateTime, nullable=False)

    # Review tracking
    repetitions = Column(Integer, nullable=False, default=0)
    lapses = Column(Integer, nullable=False, default=0)

    # Compare-and-swap counter, bumped on every write
    version = Column(Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<ReviewItemRow({self.user_id}, {self.item_type}, {self.item_key})>"
