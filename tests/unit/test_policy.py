"""Tests for authorization predicates."""

import pytest

from src.marketplace.core.exceptions import AuthError, ForbiddenError
from src.marketplace.core.identity import Actor
from src.marketplace.models import UserRole
from src.marketplace.services.policy import (
    require_actor,
    require_admin,
    require_owner_or_admin,
    require_role,
)

pytestmark = pytest.mark.unit

CLIENT = Actor(user_id=1, role=UserRole.CLIENT)
PROVIDER = Actor(user_id=2, role=UserRole.PROVIDER)
ADMIN = Actor(user_id=3, role=UserRole.ADMIN)


def test_require_actor_rejects_anonymous():
    with pytest.raises(AuthError) as exc_info:
        require_actor(None)
    assert not isinstance(exc_info.value, ForbiddenError)
    assert exc_info.value.status_code == 401


def test_require_actor_returns_actor():
    assert require_actor(CLIENT) is CLIENT


def test_require_role_allows_listed_roles():
    assert require_role(PROVIDER, UserRole.PROVIDER, UserRole.ADMIN) is PROVIDER


def test_require_role_forbids_other_roles():
    with pytest.raises(ForbiddenError) as exc_info:
        require_role(CLIENT, UserRole.PROVIDER)
    assert exc_info.value.status_code == 403
    assert "provider" in exc_info.value.message


def test_require_role_checks_authentication_first():
    with pytest.raises(AuthError) as exc_info:
        require_role(None, UserRole.CLIENT)
    assert not isinstance(exc_info.value, ForbiddenError)


def test_require_admin():
    assert require_admin(ADMIN) is ADMIN
    with pytest.raises(ForbiddenError):
        require_admin(PROVIDER)


def test_forbidden_is_an_auth_error():
    assert issubclass(ForbiddenError, AuthError)


class TestRequireOwnerOrAdmin:
    def test_owner_passes(self):
        require_owner_or_admin(CLIENT, owner_id=1)

    def test_admin_passes_for_any_owner(self):
        require_owner_or_admin(ADMIN, owner_id=999)

    def test_stranger_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            require_owner_or_admin(PROVIDER, owner_id=1)
