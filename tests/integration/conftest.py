"""Integration fixtures backed by a real PostgreSQL database.

Row locks and unique-index waits only behave like production on PostgreSQL,
so the race tests here need TEST_POSTGRES_URL (an asyncpg URL) and are
skipped otherwise.
"""

import contextlib
import os
from collections.abc import AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.marketplace.core.db import get_session
from src.marketplace.repositories import BidRepository, ServiceRequestRepository
from src.marketplace.services import BidService, RequestService

POSTGRES_URL = os.environ.get("TEST_POSTGRES_URL")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    skip = pytest.mark.skip(reason="TEST_POSTGRES_URL not set")
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)
            if not POSTGRES_URL:
                item.add_marker(skip)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """PostgreSQL engine with a freshly created schema."""
    assert POSTGRES_URL is not None
    test_engine = create_async_engine(POSTGRES_URL, poolclass=NullPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def isolated_bid_service(
    engine: AsyncEngine,
) -> Callable[[], contextlib.AbstractAsyncContextManager[BidService]]:
    """Factory for BidServices on their own sessions, one per concurrent caller."""

    @contextlib.asynccontextmanager
    async def _open() -> AsyncGenerator[BidService]:
        async with get_session(engine) as session:
            yield _bid_service(session)

    return _open


def _bid_service(session: AsyncSession) -> BidService:
    request_repo = ServiceRequestRepository(session)
    bid_repo = BidRepository(session)
    return BidService(
        bid_repo, request_repo, RequestService(request_repo, bid_repo, session), session
    )
