"""Bid arbitration service - owns the "exactly one accepted bid" guarantee."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from src.marketplace.core.identity import Actor
from src.marketplace.core.logging import get_logger
from src.marketplace.domain import NotificationEvent, Outcome
from src.marketplace.models import (
    Bid,
    BidStatus,
    NotificationType,
    RequestStatus,
    ServiceRequest,
    UserRole,
)
from src.marketplace.models.base import MAX_DB_INT, utc_now
from src.marketplace.repositories import BidRepository, ServiceRequestRepository
from src.marketplace.services.base import transaction
from src.marketplace.services.policy import (
    require_actor,
    require_owner_or_admin,
    require_role,
)
from src.marketplace.services.request_service import RequestService

logger = get_logger(__name__)


def _validate_terms(price: int | None, days: int | None) -> None:
    if price is not None and price <= 0:
        raise ValidationError("Price must be positive")
    if days is not None and days <= 0:
        raise ValidationError("Days must be positive")
    if any(v is not None and v > MAX_DB_INT for v in (price, days)):
        raise ValidationError(f"Price and days cannot exceed {MAX_DB_INT}")


class BidService:
    """Submit, edit, accept and reject bids.

    Acceptance is a single transaction: lock the request, re-read the bid,
    verify both are still pending/open, then compare-and-set the bid, reject
    its siblings and assign the request. A racing accept on a sibling bid
    finds the request already in progress and fails with ConflictError.
    """

    def __init__(
        self,
        bid_repo: BidRepository,
        request_repo: ServiceRequestRepository,
        request_service: RequestService,
        session: AsyncSession,
    ):
        self.bid_repo = bid_repo
        self.request_repo = request_repo
        self.request_service = request_service
        self.session = session

    async def submit(
        self,
        actor: Actor | None,
        request_id: int,
        price: int,
        days: int,
        note: str | None = None,
    ) -> Outcome[Bid]:
        """Place a provider's bid on an open request.

        Raises:
            ValidationError: If price or days are not positive.
            NotFoundError: If the request does not exist.
            InvalidStateError: If the request is not open.
            ConflictError: If the provider already bid on this request.
        """
        actor = require_role(actor, UserRole.PROVIDER)
        if price is None or days is None:
            raise ValidationError("Price and days are required")
        _validate_terms(price, days)

        async with transaction(self.session, "submit bid"):
            request = await self._get_request(request_id)
            if request.status is not RequestStatus.OPEN:
                raise InvalidStateError(
                    f"Request is '{request.status.value}', bids need an open request"
                )

            existing = await self.bid_repo.get_by_request_and_provider(request_id, actor.user_id)
            if existing is not None:
                raise ConflictError("duplicate bid")

            bid = Bid(
                request_id=request_id,
                provider_id=actor.user_id,
                price=price,
                days=days,
                note=note,
                status=BidStatus.PENDING,
            )
            self.bid_repo.add(bid)
            try:
                await self.session.flush()
            except IntegrityError as e:
                # Another submission by the same provider won the race
                raise ConflictError("duplicate bid") from e

        logger.info(
            "Bid submitted",
            bid_id=bid.id,
            request_id=request_id,
            provider_id=actor.user_id,
            price=price,
        )

        body = f"{request.project_number}: {price} for {days} day(s)"
        return Outcome(
            bid,
            [
                NotificationEvent.to_user(
                    request.client_id, "New bid on your request", body,
                    NotificationType.NEW_BID, ref_id=request.id,
                ),
                NotificationEvent.to_admins(
                    "New bid submitted", body, NotificationType.NEW_BID, ref_id=request.id
                ),
            ],
        )

    async def update(
        self,
        actor: Actor | None,
        bid_id: int,
        price: int | None = None,
        days: int | None = None,
        note: str | None = None,
    ) -> Bid:
        """Edit a pending bid in place. Only the provider who placed it may edit."""
        actor = require_role(actor, UserRole.PROVIDER)
        _validate_terms(price, days)

        async with transaction(self.session, "update bid"):
            bid = await self.bid_repo.get_for_update(bid_id)
            if bid is None:
                raise NotFoundError(f"Bid {bid_id} not found")
            if bid.provider_id != actor.user_id:
                raise ForbiddenError("Only the bidding provider may edit this bid")
            if bid.status is not BidStatus.PENDING:
                raise InvalidStateError("cannot edit accepted/rejected bid")

            if price is not None:
                bid.price = price
            if days is not None:
                bid.days = days
            if note is not None:
                bid.note = note
            bid.updated_at = utc_now()
            self.bid_repo.add(bid)
            await self.session.flush()

        logger.info("Bid updated", bid_id=bid_id, provider_id=actor.user_id)
        return bid

    async def accept(self, actor: Actor | None, bid_id: int) -> Outcome[Bid]:
        """Accept one bid, reject all others, and assign the request.

        Raises:
            ForbiddenError: If the actor is neither the request owner nor an admin.
            ConflictError: If the bid is no longer pending or the request no
                longer open (including a concurrent accept of a sibling bid).
        """
        actor = require_actor(actor)

        async with transaction(self.session, "accept bid"):
            bid = await self.bid_repo.get_by_id(bid_id)
            if bid is None:
                raise NotFoundError(f"Bid {bid_id} not found")

            # Lock order is request, then bid: every writer touching sibling
            # bids holds the request lock first.
            request = await self.request_repo.get_for_update(bid.request_id)
            if request is None:
                raise NotFoundError(f"Request {bid.request_id} not found")
            require_owner_or_admin(actor, request.client_id)

            bid = await self.bid_repo.get_for_update(bid_id)
            if bid is None or bid.status is not BidStatus.PENDING:
                raise ConflictError("Bid is no longer pending")
            if request.status is not RequestStatus.OPEN:
                raise ConflictError("Request is no longer open")

            if not await self.bid_repo.set_status_if(
                bid_id, BidStatus.PENDING, BidStatus.ACCEPTED
            ):
                raise ConflictError("Bid is no longer pending")
            rejected = await self.bid_repo.reject_siblings(request.id, bid_id)  # type: ignore[arg-type]
            await self.request_service.assign_on_accept(request, bid)
            await self.session.refresh(bid)

        logger.info(
            "Bid accepted",
            bid_id=bid_id,
            request_id=request.id,
            provider_id=bid.provider_id,
            accepted_by=actor.user_id,
            siblings_rejected=rejected,
        )

        return Outcome(
            bid,
            [
                NotificationEvent.to_user(
                    bid.provider_id,
                    "Your bid was accepted",
                    f"You have been assigned to {request.project_number}.",
                    NotificationType.BID_ACCEPTED,
                    ref_id=request.id,
                ),
                NotificationEvent.to_user(
                    request.client_id,
                    "Provider assigned",
                    f"{request.project_number} is now in progress.",
                    NotificationType.REQUEST_ASSIGNED,
                    ref_id=request.id,
                ),
            ],
        )

    async def reject(self, actor: Actor | None, bid_id: int) -> Outcome[Bid]:
        """Reject a single pending bid without touching its siblings.

        The request may be in any status, so lingering bids can be cleared
        after another bid won.
        """
        actor = require_actor(actor)

        async with transaction(self.session, "reject bid"):
            bid = await self.bid_repo.get_for_update(bid_id)
            if bid is None:
                raise NotFoundError(f"Bid {bid_id} not found")
            request = await self._get_request(bid.request_id)
            require_owner_or_admin(actor, request.client_id)

            if bid.status is not BidStatus.PENDING:
                raise InvalidStateError(f"Bid is already {bid.status.value}")
            if not await self.bid_repo.set_status_if(
                bid_id, BidStatus.PENDING, BidStatus.REJECTED
            ):
                raise ConflictError("Bid is no longer pending")
            await self.session.refresh(bid)

        logger.info("Bid rejected", bid_id=bid_id, rejected_by=actor.user_id)

        return Outcome(
            bid,
            [
                NotificationEvent.to_user(
                    bid.provider_id,
                    "Your bid was rejected",
                    f"Your bid on {request.project_number} was not selected.",
                    NotificationType.BID_REJECTED,
                    ref_id=request.id,
                )
            ],
        )

    async def list_for_request(self, actor: Actor | None, request_id: int) -> list[Bid]:
        """Bids on a request: all of them for the owner/admin, own bid for a provider."""
        actor = require_actor(actor)
        request = await self._get_request(request_id)

        if actor.is_admin or actor.user_id == request.client_id:
            return await self.bid_repo.list_by_request(request_id)
        if actor.role is UserRole.PROVIDER:
            own = await self.bid_repo.get_by_request_and_provider(request_id, actor.user_id)
            return [own] if own is not None else []
        raise ForbiddenError("Only the request owner may view its bids")

    async def _get_request(self, request_id: int) -> ServiceRequest:
        request = await self.request_repo.get_by_id(request_id)
        if request is None:
            raise NotFoundError(f"Request {request_id} not found")
        return request
