"""Root test fixtures shared across all test types.

Service and API tests run against a temporary SQLite file (aiosqlite); the
PostgreSQL-only race tests live in tests/integration.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789-abcdefghijklmnop")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.marketplace.models  # noqa: F401 - registers tables on the metadata
from src.marketplace.core.config import get_settings
from src.marketplace.core.db import get_session
from src.marketplace.core.identity import Actor
from src.marketplace.models import User
from src.marketplace.repositories import (
    BidRepository,
    NotificationRepository,
    ReviewRepository,
    ServiceRequestRepository,
    UserRepository,
)
from src.marketplace.services import (
    AdminService,
    BidService,
    ModerationService,
    NotificationService,
    RequestService,
    ReviewService,
)
from tests.factories import UserFactory
from tests.helpers import actor_for

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Database ---


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Fresh SQLite database file per test with the full schema."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}",
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session shared by the domain services of one test."""
    async with get_session(engine) as db_session:
        yield db_session


@pytest.fixture
async def notification_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Separate session for the dispatcher, as in production."""
    async with get_session(engine) as db_session:
        yield db_session


# --- Users ---


async def _persist(session: AsyncSession, user: User) -> User:
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def client_user(session: AsyncSession) -> User:
    return await _persist(session, UserFactory.client(name="Clara Client"))


@pytest.fixture
async def other_client(session: AsyncSession) -> User:
    return await _persist(session, UserFactory.client(name="Oscar Other"))


@pytest.fixture
async def provider_user(session: AsyncSession) -> User:
    return await _persist(session, UserFactory.provider(name="Pat Provider"))


@pytest.fixture
async def second_provider(session: AsyncSession) -> User:
    return await _persist(session, UserFactory.provider(name="Quinn Provider"))


@pytest.fixture
async def admin_user(session: AsyncSession) -> User:
    return await _persist(session, UserFactory.admin(name="Ada Admin"))


# --- Services ---


@pytest.fixture
def request_service(session: AsyncSession) -> RequestService:
    return RequestService(ServiceRequestRepository(session), BidRepository(session), session)


@pytest.fixture
def moderation_service(request_service: RequestService) -> ModerationService:
    return ModerationService(request_service)


@pytest.fixture
def bid_service(session: AsyncSession, request_service: RequestService) -> BidService:
    return BidService(
        BidRepository(session), ServiceRequestRepository(session), request_service, session
    )


@pytest.fixture
def review_service(session: AsyncSession) -> ReviewService:
    return ReviewService(
        ReviewRepository(session),
        ServiceRequestRepository(session),
        UserRepository(session),
        session,
    )


@pytest.fixture
def admin_service(session: AsyncSession) -> AdminService:
    return AdminService(
        UserRepository(session),
        ServiceRequestRepository(session),
        BidRepository(session),
        session,
    )


@pytest.fixture
def notification_service(notification_session: AsyncSession) -> NotificationService:
    return NotificationService(
        NotificationRepository(notification_session),
        UserRepository(notification_session),
        notification_session,
    )


# --- Actors ---
# Resolved up front: a rolled-back session expires the User rows above.


@pytest.fixture
def client_actor(client_user: User) -> Actor:
    return actor_for(client_user)


@pytest.fixture
def other_client_actor(other_client: User) -> Actor:
    return actor_for(other_client)


@pytest.fixture
def provider_actor(provider_user: User) -> Actor:
    return actor_for(provider_user)


@pytest.fixture
def second_provider_actor(second_provider: User) -> Actor:
    return actor_for(second_provider)


@pytest.fixture
def admin_actor(admin_user: User) -> Actor:
    return actor_for(admin_user)
