"""Repository for Review entity."""

from sqlalchemy import func
from sqlmodel import select

from src.marketplace.models import Review
from src.marketplace.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review entity."""

    model = Review

    async def get_by_request_and_reviewer(self, request_id: int, reviewer_id: int) -> Review | None:
        result = await self.session.execute(
            select(Review).where(
                Review.request_id == request_id,
                Review.reviewer_id == reviewer_id,
            )
        )
        return result.scalar_one_or_none()

    async def rating_stats(self, reviewed_id: int) -> tuple[float | None, int]:
        """Mean rating and review count for a reviewed user, computed on read.

        Returns:
            (average, count); average is None when there are no reviews.
        """
        result = await self.session.execute(
            select(func.avg(Review.rating), func.count(Review.id)).where(  # type: ignore[arg-type]
                Review.reviewed_id == reviewed_id
            )
        )
        average, count = result.one()
        return (float(average) if average is not None else None), count
