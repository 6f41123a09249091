"""Moderation gate - the only way a request leaves pending_review."""

from src.marketplace.core.exceptions import ValidationError
from src.marketplace.core.identity import Actor
from src.marketplace.core.logging import get_logger
from src.marketplace.domain import Outcome
from src.marketplace.models import ModerationDecision, ServiceRequest
from src.marketplace.services.policy import require_admin
from src.marketplace.services.request_service import RequestService

logger = get_logger(__name__)


class ModerationService:
    """Admin decision on a new request: publish it (open) or reject it."""

    def __init__(self, request_service: RequestService):
        self.request_service = request_service

    async def decide(
        self,
        actor: Actor | None,
        request_id: int,
        decision: ModerationDecision | str,
        notes: str | None = None,
    ) -> Outcome[ServiceRequest]:
        """Apply an admin's decision to a request awaiting review.

        Raises:
            AuthError/ForbiddenError: If the caller is not an admin.
            ValidationError: If the decision is not open/rejected.
            InvalidStateError: If the request is not pending_review.
        """
        actor = require_admin(actor)

        try:
            decision = ModerationDecision(decision)
        except ValueError as e:
            raise ValidationError(f"Unknown moderation decision: {decision}") from e

        notes = notes.strip() if notes else None
        outcome = await self.request_service.apply_moderation(request_id, decision, notes or None)

        logger.info(
            "Moderation decision applied",
            request_id=request_id,
            decision=decision.value,
            admin_id=actor.user_id,
        )
        return outcome
