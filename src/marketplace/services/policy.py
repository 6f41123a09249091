"""Authorization predicates - one per operation, evaluated before any mutation."""

from src.marketplace.core.exceptions import AuthError, ForbiddenError
from src.marketplace.core.identity import Actor
from src.marketplace.models.enums import UserRole


def require_actor(actor: Actor | None) -> Actor:
    """Short-circuit unauthenticated calls before any repository access."""
    if actor is None:
        raise AuthError("Authentication required")
    return actor


def require_role(actor: Actor | None, *roles: UserRole) -> Actor:
    actor = require_actor(actor)
    if actor.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        raise ForbiddenError(f"Operation requires role: {allowed}")
    return actor


def require_admin(actor: Actor | None) -> Actor:
    return require_role(actor, UserRole.ADMIN)


def require_owner_or_admin(actor: Actor, owner_id: int) -> None:
    if actor.is_admin or actor.user_id == owner_id:
        return
    raise ForbiddenError("Only the owner or an admin may perform this operation")
