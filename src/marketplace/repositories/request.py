"""Repository for ServiceRequest entity."""

from datetime import datetime

from sqlalchemy import func, update
from sqlmodel import select

from src.marketplace.models import RequestStatus, ServiceRequest
from src.marketplace.repositories.base import BaseRepository


class ServiceRequestRepository(BaseRepository[ServiceRequest]):
    """Repository for ServiceRequest entity."""

    model = ServiceRequest

    async def list_by_status(
        self,
        status: RequestStatus,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ServiceRequest], str | None, bool]:
        """List requests in one status with cursor-based pagination."""
        query = select(ServiceRequest).where(ServiceRequest.status == status)
        return await self.paginate(query, cursor, limit)

    async def list_by_client(self, client_id: int) -> list[ServiceRequest]:
        """All requests authored by a client, newest first."""
        result = await self.session.execute(
            select(ServiceRequest)
            .where(ServiceRequest.client_id == client_id)
            .order_by(ServiceRequest.id.desc())  # type: ignore[union-attr]
        )
        return list(result.scalars().all())

    async def transition(
        self,
        request_id: int,
        expected: RequestStatus,
        target: RequestStatus,
        **values: object,
    ) -> bool:
        """Compare-and-set the status of a request.

        The UPDATE only matches while the row is still in ``expected``, so a
        concurrent writer that moved it first makes this a no-op.

        Returns:
            True if the row was updated, False if the status had changed.
        """
        result = await self.session.execute(
            update(ServiceRequest)
            .where(ServiceRequest.id == request_id)  # type: ignore[arg-type]
            .where(ServiceRequest.status == expected)  # type: ignore[arg-type]
            .values(status=target, **values)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def assign(
        self,
        request_id: int,
        bid_id: int,
        provider_id: int,
        assigned_at: datetime,
    ) -> bool:
        """Move an open request to in_progress with its winning bid."""
        return await self.transition(
            request_id,
            RequestStatus.OPEN,
            RequestStatus.IN_PROGRESS,
            accepted_bid_id=bid_id,
            assigned_provider_id=provider_id,
            assigned_at=assigned_at,
        )

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(ServiceRequest))
        return result.scalar_one()

    async def count_by_status(self) -> dict[RequestStatus, int]:
        result = await self.session.execute(
            select(ServiceRequest.status, func.count()).group_by(ServiceRequest.status)
        )
        counts = {status: 0 for status in RequestStatus}
        for status, count in result.all():
            counts[RequestStatus(status)] = count
        return counts
