"""Test helper functions for common data creation patterns."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from src.marketplace.core.config import get_settings
from src.marketplace.core.identity import Actor
from src.marketplace.models import Bid, ModerationDecision, ServiceRequest, User, UserRole
from src.marketplace.services import (
    BidService,
    ModerationService,
    RequestService,
)


def actor_for(user: User) -> Actor:
    """The verified identity a token for this user would carry."""
    assert user.id is not None
    return Actor(user_id=user.id, role=user.role)


def make_token(
    user_id: int | str,
    role: UserRole | str,
    expires_in: timedelta = timedelta(minutes=15),
    secret: str | None = None,
) -> str:
    """Mint a token the way the external identity provider would."""
    settings = get_settings()
    payload = {
        "sub": str(user_id),
        "role": role.value if isinstance(role, UserRole) else role,
        "exp": datetime.now(UTC) + expires_in,
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def auth_headers(actor: Actor) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(actor.user_id, actor.role)}"}


async def create_open_request(
    request_service: RequestService,
    moderation_service: ModerationService,
    client: Actor,
    admin: Actor,
    **fields,
) -> ServiceRequest:
    """Create a request as client and publish it as admin."""
    fields.setdefault("title", "Paint the living room")
    fields.setdefault("description", "Two walls, roughly 30 square meters.")
    created = await request_service.create(client, **fields)
    outcome = await moderation_service.decide(admin, created.value.id, ModerationDecision.OPEN)
    return outcome.value


async def create_in_progress_request(
    request_service: RequestService,
    moderation_service: ModerationService,
    bid_service: BidService,
    client: Actor,
    provider: Actor,
    admin: Actor,
) -> tuple[ServiceRequest, Bid]:
    """Open a request, have provider bid, and accept that bid as client."""
    request = await create_open_request(request_service, moderation_service, client, admin)
    submitted = await bid_service.submit(provider, request.id, 120, 4)
    accepted = await bid_service.accept(client, submitted.value.id)
    return request, accepted.value
