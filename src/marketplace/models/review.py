"""Review model."""

from datetime import datetime

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.columns import enum_column
from src.marketplace.models.enums import ReviewDirection


class Review(SQLModel, table=True):
    """Post-engagement rating, one per (request, reviewer)."""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("request_id", "reviewer_id", name="uq_reviews_request_reviewer"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    id: int | None = Field(default=None, primary_key=True)
    request_id: int = Field(foreign_key="requests.id", index=True)
    reviewer_id: int = Field(foreign_key="users.id")
    reviewed_id: int = Field(foreign_key="users.id", index=True)
    rating: int
    comment: str | None = Field(default=None, max_length=2000)
    direction: ReviewDirection = Field(sa_column=enum_column(ReviewDirection))
    created_at: datetime = Field(default_factory=utc_now)
