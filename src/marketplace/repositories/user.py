"""Repository for User entity."""

from sqlalchemy import func
from sqlmodel import select

from src.marketplace.models import User, UserRole
from src.marketplace.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def list_active_ids_by_role(self, role: UserRole) -> list[int]:
        """Ids of all active users holding a role (notification fan-out)."""
        result = await self.session.execute(
            select(User.id).where(
                User.role == role,
                User.is_active == True,  # noqa: E712
            )
        )
        return [user_id for user_id in result.scalars().all() if user_id is not None]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()
