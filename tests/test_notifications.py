"""Tests for notification delivery and the inbox."""

from contextlib import asynccontextmanager

import pytest

import src.marketplace.core.db.engine as db_engine
from src.marketplace.core.exceptions import NotFoundError, ValidationError
from src.marketplace.domain import NotificationEvent
from src.marketplace.models import NotificationType
import src.marketplace.services.notification_service as notification_module
from src.marketplace.services import dispatch_events
from tests.factories import NotificationFactory, UserFactory


def new_bid_for_admins() -> NotificationEvent:
    return NotificationEvent.to_admins(
        "New bid submitted", "REQ-20260105-00001: 100 for 3 day(s)", NotificationType.NEW_BID
    )


async def test_admin_broadcast_skips_inactive_admins(
    session, notification_service, admin_actor
):
    second_admin = UserFactory.admin(name="Second Admin")
    retired_admin = UserFactory.admin(name="Retired Admin", is_active=False)
    session.add_all([second_admin, retired_admin])
    await session.commit()

    written = await notification_service.dispatch([new_bid_for_admins()])

    assert written == 2
    for user_id in (admin_actor.user_id, second_admin.id):
        assert await notification_service.notification_repo.count_unread(user_id) == 1
    assert await notification_service.notification_repo.count_unread(retired_admin.id) == 0


async def test_inbox_newest_first_with_unread_count(
    session, notification_service, client_actor
):
    session.add_all(
        [
            NotificationFactory.build(user_id=client_actor.user_id, title="First"),
            NotificationFactory.build(user_id=client_actor.user_id, title="Second", is_read=True),
            NotificationFactory.build(user_id=client_actor.user_id, title="Third"),
        ]
    )
    await session.commit()

    items, next_cursor, has_more = await notification_service.list_for_user(client_actor)

    assert [n.title for n in items] == ["Third", "Second", "First"]
    assert next_cursor is None
    assert has_more is False
    assert await notification_service.unread_count(client_actor) == 2


async def test_inbox_is_private(session, notification_service, client_actor, provider_actor):
    session.add(NotificationFactory.build(user_id=provider_actor.user_id))
    await session.commit()

    items, _, _ = await notification_service.list_for_user(client_actor)

    assert items == []


async def test_mark_read(session, notification_service, client_actor):
    notification = NotificationFactory.build(user_id=client_actor.user_id)
    session.add(notification)
    await session.commit()

    await notification_service.mark_read(client_actor, notification.id)

    assert await notification_service.unread_count(client_actor) == 0
    [item], _, _ = await notification_service.list_for_user(client_actor)
    assert item.is_read is True


async def test_cannot_mark_someone_elses_notification(
    session, notification_service, client_actor, provider_actor
):
    notification = NotificationFactory.build(user_id=provider_actor.user_id)
    session.add(notification)
    await session.commit()

    with pytest.raises(NotFoundError):
        await notification_service.mark_read(client_actor, notification.id)

    assert await notification_service.unread_count(provider_actor) == 1


async def test_mark_unknown_notification(notification_service, client_actor):
    with pytest.raises(NotFoundError):
        await notification_service.mark_read(client_actor, 999)


class TestDispatchEvents:
    """The background-task entry point that runs after a commit."""

    async def test_writes_in_its_own_session(
        self, engine, monkeypatch, notification_service, client_actor
    ):
        monkeypatch.setattr(db_engine, "_engine", engine)
        event = NotificationEvent.to_user(
            client_actor.user_id, "Provider assigned", "REQ is now in progress.",
            NotificationType.REQUEST_ASSIGNED, ref_id=1,
        )

        assert await dispatch_events([event]) == 1
        assert await notification_service.unread_count(client_actor) == 1

    async def test_no_events_is_a_no_op(self, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("no session should be opened")

        monkeypatch.setattr(notification_module, "get_session", _fail)

        assert await dispatch_events([]) == 0

    async def test_store_failure_is_swallowed(self, monkeypatch, client_actor):
        @asynccontextmanager
        async def _unavailable(*args, **kwargs):
            raise ConnectionError("database unavailable")
            yield

        monkeypatch.setattr(notification_module, "get_session", _unavailable)
        event = NotificationEvent.to_user(
            client_actor.user_id, "t", "b", NotificationType.REQUEST_APPROVED
        )

        assert await dispatch_events([event]) == 0


async def test_malformed_cursor_is_rejected(notification_service, client_actor):
    with pytest.raises(ValidationError):
        await notification_service.list_for_user(client_actor, cursor="not-a-cursor")
