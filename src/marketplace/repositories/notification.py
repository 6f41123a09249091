"""Repository for Notification entity."""

from sqlalchemy import func, update
from sqlmodel import select

from src.marketplace.models import Notification
from src.marketplace.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification entity (append-only apart from is_read)."""

    model = Notification

    async def list_for_user(
        self,
        user_id: int,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Notification], str | None, bool]:
        """List a user's notifications, newest first."""
        query = select(Notification).where(Notification.user_id == user_id)
        return await self.paginate(query, cursor, limit)

    async def count_unread(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
        )
        return result.scalar_one()

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        """Set the read flag on a notification owned by user_id."""
        result = await self.session.execute(
            update(Notification)
            .where(Notification.id == notification_id)  # type: ignore[arg-type]
            .where(Notification.user_id == user_id)  # type: ignore[arg-type]
            .values(is_read=True)
            .execution_options(synchronize_session="evaluate")
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]
