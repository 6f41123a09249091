"""Request lifecycle service - the state machine driving a service request."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.marketplace.core.identity import Actor
from src.marketplace.core.logging import get_logger
from src.marketplace.domain import NotificationEvent, Outcome, ensure_transition
from src.marketplace.models import (
    Bid,
    ModerationDecision,
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
    require_admin,
    require_owner_or_admin,
    require_role,
)

logger = get_logger(__name__)

# Statuses anyone signed in may look at; the rest are private to the parties.
PUBLIC_STATUSES = frozenset(
    {RequestStatus.OPEN, RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED}
)


class RequestService:
    """Drives a request through pending_review -> open -> in_progress -> completed.

    Moderation is reached only through ModerationService; assignment only
    through BidService.accept. Every transition is checked against the
    lifecycle table and applied as a compare-and-set on the current status.
    """

    def __init__(
        self,
        request_repo: ServiceRequestRepository,
        bid_repo: BidRepository,
        session: AsyncSession,
    ):
        self.request_repo = request_repo
        self.bid_repo = bid_repo
        self.session = session

    async def create(
        self,
        actor: Actor | None,
        title: str | None,
        description: str | None,
        category: str | None = None,
        city: str | None = None,
        address: str | None = None,
        budget_min: int | None = None,
        budget_max: int | None = None,
        deadline: datetime | None = None,
    ) -> Outcome[ServiceRequest]:
        """Post a new request. It waits in pending_review until an admin decides."""
        actor = require_role(actor, UserRole.CLIENT, UserRole.ADMIN)

        title = (title or "").strip()
        description = (description or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if not description:
            raise ValidationError("Description is required")
        if any(b is not None and b < 0 for b in (budget_min, budget_max)):
            raise ValidationError("Budget cannot be negative")
        if any(b is not None and b > MAX_DB_INT for b in (budget_min, budget_max)):
            raise ValidationError(f"Budget cannot exceed {MAX_DB_INT}")
        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise ValidationError("budget_min cannot exceed budget_max")

        request = ServiceRequest(
            client_id=actor.user_id,
            title=title,
            description=description,
            category=category,
            city=city,
            address=address,
            budget_min=budget_min,
            budget_max=budget_max,
            deadline=deadline,
            status=RequestStatus.PENDING_REVIEW,
        )

        async with transaction(self.session, "create request"):
            self.request_repo.add(request)
            await self.session.flush()

        logger.info("Request created", request_id=request.id, client_id=actor.user_id)
        return Outcome(
            request,
            [
                NotificationEvent.to_admins(
                    title="New request awaiting review",
                    body=f"{request.project_number}: {request.title}",
                    type=NotificationType.NEW_REQUEST,
                    ref_id=request.id,
                )
            ],
        )

    async def get(self, actor: Actor | None, request_id: int) -> ServiceRequest:
        """Get a request visible to the actor."""
        actor = require_actor(actor)
        request = await self._get_or_404(request_id)

        if request.status not in PUBLIC_STATUSES and not (
            actor.is_admin
            or actor.user_id == request.client_id
            or actor.user_id == request.assigned_provider_id
        ):
            # Private requests are reported as absent to outsiders.
            raise NotFoundError(f"Request {request_id} not found")
        return request

    async def list_open(
        self,
        actor: Actor | None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ServiceRequest], str | None, bool]:
        """Public board of requests accepting bids, newest first."""
        require_actor(actor)
        return await self.request_repo.list_by_status(RequestStatus.OPEN, cursor, limit)

    async def list_mine(self, actor: Actor | None) -> list[ServiceRequest]:
        actor = require_role(actor, UserRole.CLIENT)
        return await self.request_repo.list_by_client(actor.user_id)

    async def list_pending_review(
        self,
        actor: Actor | None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ServiceRequest], str | None, bool]:
        """Moderation queue."""
        require_admin(actor)
        return await self.request_repo.list_by_status(RequestStatus.PENDING_REVIEW, cursor, limit)

    async def apply_moderation(
        self,
        request_id: int,
        decision: ModerationDecision,
        notes: str | None,
    ) -> Outcome[ServiceRequest]:
        """Apply an admin decision. Callers must go through ModerationService."""
        target = RequestStatus(decision.value)

        async with transaction(self.session, "moderate request"):
            request = await self._get_or_404(request_id)
            await self._transition(request, target, admin_notes=notes)

        logger.info("Request moderated", request_id=request_id, decision=decision.value)

        if target is RequestStatus.OPEN:
            title = "Your request was approved"
            body = f"{request.project_number} is now open for bids."
            notification_type = NotificationType.REQUEST_APPROVED
        else:
            title = "Your request was rejected"
            body = f"{request.project_number} was rejected."
            notification_type = NotificationType.REQUEST_REJECTED
        if notes:
            body = f"{body} Notes: {notes}"

        return Outcome(
            request,
            [
                NotificationEvent.to_user(
                    request.client_id, title, body, notification_type, ref_id=request.id
                )
            ],
        )

    async def assign_on_accept(self, request: ServiceRequest, bid: Bid) -> None:
        """Move an open request to in_progress with its winning bid.

        Runs inside BidService.accept's transaction and never commits.

        Raises:
            InvalidStateError: If the loaded request is not open.
            ConflictError: If a concurrent writer moved it first.
        """
        ensure_transition(request.status, RequestStatus.IN_PROGRESS)

        assigned = await self.request_repo.assign(
            request.id,  # type: ignore[arg-type]
            bid_id=bid.id,  # type: ignore[arg-type]
            provider_id=bid.provider_id,
            assigned_at=utc_now(),
        )
        if not assigned:
            raise ConflictError("Request is no longer open")
        await self.session.refresh(request)

    async def complete(self, actor: Actor | None, request_id: int) -> Outcome[ServiceRequest]:
        """Mark in-progress work as done (admin only)."""
        require_admin(actor)

        async with transaction(self.session, "complete request"):
            request = await self._get_or_404(request_id)
            await self._transition(request, RequestStatus.COMPLETED, completed_at=utc_now())

        logger.info("Request completed", request_id=request_id)

        body = f"{request.project_number} has been marked as completed."
        events = [
            NotificationEvent.to_user(
                request.client_id,
                "Request completed",
                body,
                NotificationType.REQUEST_COMPLETED,
                ref_id=request.id,
            )
        ]
        if request.assigned_provider_id is not None:
            events.append(
                NotificationEvent.to_user(
                    request.assigned_provider_id,
                    "Job completed",
                    body,
                    NotificationType.REQUEST_COMPLETED,
                    ref_id=request.id,
                )
            )
        return Outcome(request, events)

    async def cancel(self, actor: Actor | None, request_id: int) -> Outcome[ServiceRequest]:
        """Cancel a non-terminal request (owner or admin).

        Pending bids on the request are rejected in the same transaction.
        """
        actor = require_actor(actor)

        async with transaction(self.session, "cancel request"):
            request = await self._get_or_404(request_id)
            require_owner_or_admin(actor, request.client_id)
            await self._transition(request, RequestStatus.CANCELLED, cancelled_at=utc_now())
            rejected = await self.bid_repo.reject_pending(request.id)  # type: ignore[arg-type]

        logger.info(
            "Request cancelled",
            request_id=request_id,
            cancelled_by=actor.user_id,
            bids_rejected=rejected,
        )

        body = f"{request.project_number} was cancelled."
        events = []
        if request.assigned_provider_id is not None:
            events.append(
                NotificationEvent.to_user(
                    request.assigned_provider_id,
                    "Job cancelled",
                    body,
                    NotificationType.REQUEST_CANCELLED,
                    ref_id=request.id,
                )
            )
        if actor.user_id != request.client_id:
            events.append(
                NotificationEvent.to_user(
                    request.client_id,
                    "Your request was cancelled",
                    body,
                    NotificationType.REQUEST_CANCELLED,
                    ref_id=request.id,
                )
            )
        return Outcome(request, events)

    async def _get_or_404(self, request_id: int) -> ServiceRequest:
        request = await self.request_repo.get_by_id(request_id)
        if request is None:
            raise NotFoundError(f"Request {request_id} not found")
        return request

    async def _transition(
        self,
        request: ServiceRequest,
        target: RequestStatus,
        **values: object,
    ) -> None:
        """Check the edge, then compare-and-set the status and refresh the entity."""
        ensure_transition(request.status, target)
        moved = await self.request_repo.transition(
            request.id,  # type: ignore[arg-type]
            request.status,
            target,
            **values,
        )
        if not moved:
            raise ConflictError("Request was modified concurrently")
        await self.session.refresh(request)
