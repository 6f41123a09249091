"""Admin console schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.marketplace.models import RequestStatus, UserRole


class StatsRead(BaseModel):
    users: int
    requests: int
    bids: int
    requests_by_status: dict[RequestStatus, int]

    model_config = {"from_attributes": True}


class BadgeUpdate(BaseModel):
    """Set or clear (null) a provider's badge."""

    badge: str | None = Field(default=None, max_length=100)


class ActiveUpdate(BaseModel):
    is_active: bool


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    is_active: bool
    badge: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
