"""Notification dispatcher - persists events after the triggering change committed."""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.config import get_settings
from src.marketplace.core.db import get_session
from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.core.identity import Actor
from src.marketplace.core.logging import get_logger
from src.marketplace.domain import NotificationEvent
from src.marketplace.models import Notification, NotificationType
from src.marketplace.repositories import NotificationRepository, UserRepository
from src.marketplace.services.base import transaction
from src.marketplace.services.policy import require_actor

logger = get_logger(__name__)


class NotificationService:
    """Record and read user notifications.

    Delivery is at-most-once: a failed write is logged and dropped, never
    retried, and never reported to the caller of the triggering operation.
    The session must not be shared with a domain transaction.
    """

    def __init__(
        self,
        notification_repo: NotificationRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.notification_repo = notification_repo
        self.user_repo = user_repo
        self.session = session

    async def record(
        self,
        user_id: int,
        title: str,
        body: str,
        type: NotificationType,
        ref_id: int | None = None,
    ) -> bool:
        """Append one notification and commit it.

        Returns:
            True if the row was written, False if the write failed
        """
        max_length = get_settings().notification_body_max_length
        if len(body) > max_length:
            body = body[: max_length - 3] + "..."

        try:
            self.notification_repo.add(
                Notification(user_id=user_id, title=title, body=body, type=type, ref_id=ref_id)
            )
            await self.session.commit()
            return True
        except Exception as e:
            await self.session.rollback()
            logger.warning(
                "Failed to record notification",
                user_id=user_id,
                type=type.value,
                ref_id=ref_id,
                error=str(e),
            )
            return False

    async def dispatch(self, events: Iterable[NotificationEvent]) -> int:
        """Record every event, expanding role broadcasts to active users.

        Returns:
            Number of notifications written
        """
        written = 0
        for event in events:
            try:
                if event.recipient_id is not None:
                    recipients = [event.recipient_id]
                else:
                    recipients = await self.user_repo.list_active_ids_by_role(
                        event.recipient_role  # type: ignore[arg-type]
                    )
            except Exception as e:
                logger.warning(
                    "Failed to resolve notification recipients",
                    role=event.recipient_role.value if event.recipient_role else None,
                    type=event.type.value,
                    error=str(e),
                )
                continue

            for user_id in recipients:
                if await self.record(user_id, event.title, event.body, event.type, event.ref_id):
                    written += 1

        if written:
            logger.info("Notifications dispatched", count=written)
        return written

    async def list_for_user(
        self,
        actor: Actor | None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Notification], str | None, bool]:
        """The actor's notifications, newest first."""
        actor = require_actor(actor)
        return await self.notification_repo.list_for_user(actor.user_id, cursor, limit)

    async def unread_count(self, actor: Actor | None) -> int:
        actor = require_actor(actor)
        return await self.notification_repo.count_unread(actor.user_id)

    async def mark_read(self, actor: Actor | None, notification_id: int) -> None:
        """Flag one of the actor's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist or belongs to
                someone else.
        """
        actor = require_actor(actor)

        async with transaction(self.session, "mark notification read"):
            if not await self.notification_repo.mark_read(notification_id, actor.user_id):
                raise NotFoundError(f"Notification {notification_id} not found")


async def dispatch_events(events: list[NotificationEvent]) -> int:
    """Dispatch events in a session of their own.

    Runs after the triggering transaction committed (a FastAPI background
    task), so nothing here can undo or fail the domain change.
    """
    if not events:
        return 0
    try:
        async with get_session() as session:
            service = NotificationService(
                NotificationRepository(session), UserRepository(session), session
            )
            return await service.dispatch(events)
    except Exception as e:
        logger.warning("Notification dispatch failed", count=len(events), error=str(e))
        return 0
