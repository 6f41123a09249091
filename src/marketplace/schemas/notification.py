"""Notification schemas for API response."""

from datetime import datetime

from pydantic import BaseModel

from src.marketplace.models import NotificationType
from src.marketplace.schemas.pagination import PaginatedResponse


class NotificationRead(BaseModel):
    id: int
    title: str
    body: str
    type: NotificationType
    ref_id: int | None
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationPage(PaginatedResponse[NotificationRead]):
    unread_count: int = 0
