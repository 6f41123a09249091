"""Repository for Bid entity."""

from sqlalchemy import func, update
from sqlmodel import select

from src.marketplace.models import Bid, BidStatus
from src.marketplace.models.base import utc_now
from src.marketplace.repositories.base import BaseRepository


class BidRepository(BaseRepository[Bid]):
    """Repository for Bid entity."""

    model = Bid

    async def get_by_request_and_provider(self, request_id: int, provider_id: int) -> Bid | None:
        """Get the single bid a provider holds on a request, if any."""
        result = await self.session.execute(
            select(Bid).where(
                Bid.request_id == request_id,
                Bid.provider_id == provider_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_by_request(self, request_id: int) -> list[Bid]:
        """All bids on a request, cheapest first."""
        result = await self.session.execute(
            select(Bid)
            .where(Bid.request_id == request_id)
            .order_by(Bid.price, Bid.id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def set_status_if(self, bid_id: int, expected: BidStatus, target: BidStatus) -> bool:
        """Compare-and-set a single bid's status.

        Returns:
            True if the bid was still ``expected`` and is now ``target``.
        """
        result = await self.session.execute(
            update(Bid)
            .where(Bid.id == bid_id)  # type: ignore[arg-type]
            .where(Bid.status == expected)  # type: ignore[arg-type]
            .values(status=target, updated_at=utc_now())
            .execution_options(synchronize_session="evaluate")
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def reject_siblings(self, request_id: int, winner_id: int) -> int:
        """Reject every other bid on the request. Returns number of rows touched."""
        result = await self.session.execute(
            update(Bid)
            .where(Bid.request_id == request_id)  # type: ignore[arg-type]
            .where(Bid.id != winner_id)  # type: ignore[arg-type]
            .where(Bid.status != BidStatus.REJECTED)  # type: ignore[arg-type]
            .values(status=BidStatus.REJECTED, updated_at=utc_now())
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def reject_pending(self, request_id: int) -> int:
        """Reject all pending bids on a request (used when it is cancelled)."""
        result = await self.session.execute(
            update(Bid)
            .where(Bid.request_id == request_id)  # type: ignore[arg-type]
            .where(Bid.status == BidStatus.PENDING)  # type: ignore[arg-type]
            .values(status=BidStatus.REJECTED, updated_at=utc_now())
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Bid))
        return result.scalar_one()
