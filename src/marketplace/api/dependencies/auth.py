"""Authentication dependencies - bearer token to verified Actor."""

from typing import Annotated

from fastapi import Depends, Header

from src.marketplace.api.dependencies.db import DBSession
from src.marketplace.core.exceptions import AuthError
from src.marketplace.core.identity import Actor, actor_from_token
from src.marketplace.core.logging import bind_actor_context
from src.marketplace.repositories import UserRepository


async def get_current_actor(
    session: DBSession,
    authorization: Annotated[str | None, Header()] = None,
) -> Actor:
    """Verify the Authorization header and return the caller.

    The token is checked before anything touches the store. A verified token
    for a user that no longer exists or was deactivated is also refused.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing or invalid authorization header")

    actor = actor_from_token(authorization[7:])
    if actor is None:
        raise AuthError("Invalid or expired token")

    user = await UserRepository(session).get_by_id(actor.user_id)
    if user is None or not user.is_active:
        raise AuthError("User not found or inactive")

    bind_actor_context(actor.user_id, actor.role.value)
    return actor


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
