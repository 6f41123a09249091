"""Transaction boundary shared by the domain services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import DomainError, InternalError
from src.marketplace.core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def transaction(session: AsyncSession, operation: str) -> AsyncGenerator[None]:
    """Commit on success, roll back on any failure.

    Domain errors propagate unchanged. Store failures are logged and surfaced
    as InternalError; nothing is retried.
    """
    try:
        yield
        await session.commit()
    except DomainError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Store failure", operation=operation, error=str(e))
        raise InternalError(f"Failed to {operation}") from e
