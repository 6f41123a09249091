"""Identity verification - turns a bearer token into a verified actor.

Tokens are issued by the external identity provider; this module only
verifies them. The verified pair is (user id, role).
"""

from dataclasses import dataclass
from typing import Any

from jose import JWTError, jwt

from src.marketplace.core.config import get_settings
from src.marketplace.models.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """Immutable verified caller identity for one operation."""

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def actor_from_token(token: str) -> Actor | None:
    """Verify a token and extract the actor. Returns None if anything is off.

    Requires an integer ``sub`` claim and a ``role`` claim naming a known role.
    """
    payload = decode_token(token)
    if payload is None:
        return None

    try:
        user_id = int(payload.get("sub", ""))
        role = UserRole(payload.get("role"))
    except (TypeError, ValueError):
        return None

    if user_id <= 0:
        return None
    return Actor(user_id=user_id, role=role)
