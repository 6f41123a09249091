"""Notification model - append-only event records."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.columns import enum_column
from src.marketplace.models.enums import NotificationType


class Notification(SQLModel, table=True):
    """User-facing record of a domain event.

    Rows are never updated except for ``is_read``.
    """

    __tablename__ = "notifications"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=255)
    body: str = Field(max_length=1000)
    type: NotificationType = Field(sa_column=enum_column(NotificationType))
    ref_id: int | None = Field(default=None)
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, index=True)
