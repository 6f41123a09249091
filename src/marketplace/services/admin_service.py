"""Admin service - platform-level operations (admin only)."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import NotFoundError, ValidationError
from src.marketplace.core.identity import Actor
from src.marketplace.core.logging import get_logger
from src.marketplace.models import RequestStatus, User, UserRole
from src.marketplace.repositories import (
    BidRepository,
    ServiceRequestRepository,
    UserRepository,
)
from src.marketplace.services.base import transaction
from src.marketplace.services.policy import require_admin

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlatformStats:
    users: int
    requests: int
    bids: int
    requests_by_status: dict[RequestStatus, int]


class AdminService:
    """Service for platform-wide admin operations."""

    def __init__(
        self,
        user_repo: UserRepository,
        request_repo: ServiceRequestRepository,
        bid_repo: BidRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.request_repo = request_repo
        self.bid_repo = bid_repo
        self.session = session

    async def stats(self, actor: Actor | None) -> PlatformStats:
        require_admin(actor)
        return PlatformStats(
            users=await self.user_repo.count(),
            requests=await self.request_repo.count(),
            bids=await self.bid_repo.count(),
            requests_by_status=await self.request_repo.count_by_status(),
        )

    async def set_badge(self, actor: Actor | None, user_id: int, badge: str | None) -> User:
        """Grant or clear a provider's badge.

        Raises:
            NotFoundError: If the user does not exist.
            ValidationError: If the user is not a provider.
        """
        actor = require_admin(actor)
        badge = badge.strip() if badge else None

        async with transaction(self.session, "set badge"):
            user = await self._get_user(user_id)
            if user.role is not UserRole.PROVIDER:
                raise ValidationError("Only providers can carry a badge")
            user.badge = badge or None
            self.user_repo.add(user)

        logger.info("Badge updated", user_id=user_id, badge=user.badge, admin_id=actor.user_id)
        return user

    async def set_active(self, actor: Actor | None, user_id: int, is_active: bool) -> User:
        actor = require_admin(actor)
        if actor.user_id == user_id and not is_active:
            raise ValidationError("Admins cannot deactivate themselves")

        async with transaction(self.session, "set user active"):
            user = await self._get_user(user_id)
            user.is_active = is_active
            self.user_repo.add(user)

        logger.info(
            "User activation changed",
            user_id=user_id,
            is_active=is_active,
            admin_id=actor.user_id,
        )
        return user

    async def _get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
