"""Notification inbox endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.marketplace.api.dependencies import CurrentActor, NotificationServiceDep
from src.marketplace.schemas.notification import NotificationPage, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationPage,
    summary="List notifications",
    description="The caller's notifications, newest first, with the unread count.",
)
async def list_notifications(
    actor: CurrentActor,
    service: NotificationServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> NotificationPage:
    items, next_cursor, has_more = await service.list_for_user(actor, cursor=cursor, limit=limit)
    return NotificationPage(
        items=[NotificationRead.model_validate(n) for n in items],
        next_cursor=next_cursor,
        has_more=has_more,
        unread_count=await service.unread_count(actor),
    )


@router.post(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark notification read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(
    notification_id: int,
    actor: CurrentActor,
    service: NotificationServiceDep,
) -> None:
    await service.mark_read(actor, notification_id)
