from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Review


class ReviewRepository:

    @staticmethod
    async def add(db: AsyncSession, review: Review) -> Review:
        db.add(review)
        await db.flush()
        return review

    @staticmethod
    async def list_by_book(db: AsyncSession, book_id: int) -> List[Review]:
        result = await db.execute(
            select(Review)
            .where(Review.book_id == book_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return list(result.scalars().unique().all())
