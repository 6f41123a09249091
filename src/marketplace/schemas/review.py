"""Review and rating schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.marketplace.models import ReviewDirection


class ReviewCreate(BaseModel):
    reviewed_id: int
    rating: int
    comment: str | None = Field(default=None, max_length=2000)
    direction: ReviewDirection


class ReviewRead(BaseModel):
    id: int
    request_id: int
    reviewer_id: int
    reviewed_id: int
    rating: int
    comment: str | None
    direction: ReviewDirection
    created_at: datetime

    model_config = {"from_attributes": True}


class RatingRead(BaseModel):
    """Average rating projection, recomputed from reviews on every read."""

    user_id: int
    average: float | None
    count: int
    badge: str | None

    model_config = {"from_attributes": True}
