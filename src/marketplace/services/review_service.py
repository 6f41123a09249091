"""Review ledger - ratings exchanged between the parties of a completed request."""

from dataclasses import dataclass

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
    NotificationType,
    RequestStatus,
    Review,
    ReviewDirection,
)
from src.marketplace.repositories import (
    ReviewRepository,
    ServiceRequestRepository,
    UserRepository,
)
from src.marketplace.services.base import transaction
from src.marketplace.services.policy import require_actor

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class RatingSummary:
    user_id: int
    average: float | None
    count: int
    badge: str | None


class ReviewService:
    """Record reviews and project ratings from them.

    Ratings are never cached; the average is recomputed from the ledger on
    every read.
    """

    def __init__(
        self,
        review_repo: ReviewRepository,
        request_repo: ServiceRequestRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.review_repo = review_repo
        self.request_repo = request_repo
        self.user_repo = user_repo
        self.session = session

    async def submit(
        self,
        actor: Actor | None,
        request_id: int,
        reviewed_id: int,
        rating: int,
        comment: str | None,
        direction: ReviewDirection | str,
    ) -> Outcome[Review]:
        """Review the counterpart of a completed request.

        The client reviews the assigned provider (client_to_provider) and the
        assigned provider reviews the client (provider_to_client). Each party
        may review a request once.

        Raises:
            ValidationError: Rating outside 1-5, wrong counterpart or direction.
            NotFoundError: Unknown request.
            InvalidStateError: Request not completed.
            ForbiddenError: Reviewer is not a party to the request.
            ConflictError: Reviewer already reviewed this request.
        """
        actor = require_actor(actor)

        if rating is None or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        try:
            direction = ReviewDirection(direction)
        except ValueError as e:
            raise ValidationError(f"Unknown review direction: {direction}") from e

        async with transaction(self.session, "submit review"):
            request = await self.request_repo.get_by_id(request_id)
            if request is None:
                raise NotFoundError(f"Request {request_id} not found")
            if request.status is not RequestStatus.COMPLETED:
                raise InvalidStateError("Only completed requests can be reviewed")

            if actor.user_id == request.client_id:
                counterpart = request.assigned_provider_id
                expected_direction = ReviewDirection.CLIENT_TO_PROVIDER
            elif actor.user_id == request.assigned_provider_id:
                counterpart = request.client_id
                expected_direction = ReviewDirection.PROVIDER_TO_CLIENT
            else:
                raise ForbiddenError("Only the parties of a request may review it")

            if reviewed_id != counterpart:
                raise ValidationError("Reviewed user must be the other party of the request")
            if direction is not expected_direction:
                raise ValidationError(f"Direction must be '{expected_direction.value}'")

            existing = await self.review_repo.get_by_request_and_reviewer(
                request_id, actor.user_id
            )
            if existing is not None:
                raise ConflictError("already reviewed")

            review = Review(
                request_id=request_id,
                reviewer_id=actor.user_id,
                reviewed_id=reviewed_id,
                rating=rating,
                comment=comment.strip() if comment else None,
                direction=direction,
            )
            self.review_repo.add(review)
            try:
                await self.session.flush()
            except IntegrityError as e:
                raise ConflictError("already reviewed") from e

        logger.info(
            "Review submitted",
            review_id=review.id,
            request_id=request_id,
            reviewer_id=actor.user_id,
            reviewed_id=reviewed_id,
            rating=rating,
        )

        return Outcome(
            review,
            [
                NotificationEvent.to_user(
                    reviewed_id,
                    "New review",
                    f"You received a {rating}-star review for {request.project_number}.",
                    NotificationType.NEW_REVIEW,
                    ref_id=request.id,
                )
            ],
        )

    async def average_rating(self, user_id: int) -> float | None:
        """Mean rating received by a user, or None without reviews."""
        average, _ = await self.review_repo.rating_stats(user_id)
        return average

    async def rating_summary(self, user_id: int) -> RatingSummary:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        average, count = await self.review_repo.rating_stats(user_id)
        return RatingSummary(
            user_id=user_id,
            average=round(average, 2) if average is not None else None,
            count=count,
            badge=user.badge,
        )
