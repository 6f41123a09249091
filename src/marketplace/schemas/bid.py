"""Bid schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.marketplace.models import BidStatus
from src.marketplace.models.base import MAX_DB_INT


class BidCreate(BaseModel):
    price: int = Field(gt=0, le=MAX_DB_INT)
    days: int = Field(gt=0, le=MAX_DB_INT)
    note: str | None = Field(default=None, max_length=2000)


class BidUpdate(BaseModel):
    """Partial edit of a pending bid; omitted fields stay unchanged."""

    price: int | None = Field(default=None, gt=0, le=MAX_DB_INT)
    days: int | None = Field(default=None, gt=0, le=MAX_DB_INT)
    note: str | None = Field(default=None, max_length=2000)


class BidRead(BaseModel):
    id: int
    request_id: int
    provider_id: int
    price: int
    days: int
    note: str | None
    status: BidStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
