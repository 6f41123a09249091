"""Service request schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.marketplace.models import ModerationDecision, RequestStatus
from src.marketplace.models.base import MAX_DB_INT


class RequestCreate(BaseModel):
    """Schema for posting a service request."""

    title: str = Field(min_length=1, max_length=500)
    description: str = Field(min_length=1, max_length=5000)
    category: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    budget_min: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    budget_max: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    deadline: datetime | None = None

    @field_validator("category", "city", "address")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class RequestRead(BaseModel):
    id: int
    project_number: str | None
    client_id: int
    title: str
    description: str
    category: str | None
    city: str | None
    address: str | None
    budget_min: int | None
    budget_max: int | None
    deadline: datetime | None
    status: RequestStatus
    assigned_provider_id: int | None
    accepted_bid_id: int | None
    admin_notes: str | None
    created_at: datetime
    assigned_at: datetime | None
    completed_at: datetime | None
    cancelled_at: datetime | None

    model_config = {"from_attributes": True}


class ModerationRequest(BaseModel):
    """Admin decision on a request awaiting review."""

    decision: ModerationDecision
    notes: str | None = Field(default=None, max_length=2000)
