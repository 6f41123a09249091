"""Base repository with common CRUD operations."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.marketplace.core.exceptions import ValidationError
from src.marketplace.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit,
    rollback) is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, id: int) -> ModelType | None:
        """Get a record by primary key, locking the row until the transaction ends.

        Backends without row locks (SQLite) ignore FOR UPDATE; callers still
        guard their writes with conditional updates.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar - SQLModel query
        cursor: str | None,
        limit: int,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Run ``query`` newest (highest id) first, one page at a time.

        Fetches one row beyond ``limit`` to learn whether another page exists.

        Returns:
            (items, next_cursor, has_more)

        Raises:
            ValidationError: If the cursor is malformed.
        """
        id_column = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                before_id = decode_cursor(cursor)
            except ValueError as e:
                raise ValidationError("Invalid pagination cursor") from e
            query = query.where(id_column < before_id)

        result = await self.session.execute(query.order_by(id_column.desc()).limit(limit + 1))
        rows = list(result.scalars().all())

        has_more = len(rows) > limit
        page = rows[:limit]
        next_cursor = encode_cursor(page[-1].id) if has_more else None  # type: ignore[attr-defined]
        return page, next_cursor, has_more
