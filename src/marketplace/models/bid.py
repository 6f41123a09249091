"""Bid model."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.columns import enum_column
from src.marketplace.models.enums import BidStatus


class Bid(SQLModel, table=True):
    """A provider's priced, timed offer against an open request.

    A provider holds at most one bid per request; the unique constraint is the
    final arbiter when two submissions race.
    """

    __tablename__ = "bids"
    __table_args__ = (UniqueConstraint("request_id", "provider_id", name="uq_bids_request_provider"),)

    id: int | None = Field(default=None, primary_key=True)
    request_id: int = Field(foreign_key="requests.id", index=True)
    provider_id: int = Field(foreign_key="users.id", index=True)
    price: int
    days: int
    note: str | None = Field(default=None, max_length=2000)
    status: BidStatus = Field(default=BidStatus.PENDING, sa_column=enum_column(BidStatus))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
