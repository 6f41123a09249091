"""Service request model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.marketplace.core.config import get_settings
from src.marketplace.models.base import utc_now
from src.marketplace.models.columns import enum_column
from src.marketplace.models.enums import RequestStatus


def format_project_number(prefix: str, request_id: int, created_at: datetime) -> str:
    """Human-readable project number, e.g. ``REQ-20260105-00042``."""
    return f"{prefix}-{created_at:%Y%m%d}-{request_id:05d}"


class ServiceRequest(SQLModel, table=True):
    """A client's posted need for a service.

    ``status`` is only ever changed through the lifecycle transition table.
    ``assigned_provider_id`` and ``accepted_bid_id`` are set together, once,
    when a bid is accepted.
    """

    __tablename__ = "requests"

    id: int | None = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=500)
    description: str
    category: str | None = Field(default=None, max_length=100, index=True)
    city: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    budget_min: int | None = Field(default=None)
    budget_max: int | None = Field(default=None)
    deadline: datetime | None = Field(default=None)
    status: RequestStatus = Field(
        default=RequestStatus.PENDING_REVIEW,
        sa_column=enum_column(RequestStatus, index=True),
    )
    assigned_provider_id: int | None = Field(default=None, foreign_key="users.id")
    accepted_bid_id: int | None = Field(default=None)
    admin_notes: str | None = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    assigned_at: datetime | None = Field(default=None)
    completed_at: datetime | None = Field(default=None)
    cancelled_at: datetime | None = Field(default=None)

    @property
    def project_number(self) -> str | None:
        if self.id is None:
            return None
        return format_project_number(
            get_settings().project_number_prefix, self.id, self.created_at
        )
