from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.repository import UserRepository
from services.catalog_service.repository import BookRepository
from shared.config.database import transaction
from shared.errors import BookNotFound, UserNotFound, ValidationError

from .models import Review
from .repository import ReviewRepository
from .schemas import ReviewCreate, ReviewResponse

logger = structlog.get_logger(__name__)

ANONYMOUS_READER = "Anonymous reader"


def to_review_response(review: Review) -> ReviewResponse:
    username = ANONYMOUS_READER
    if review.user is not None and review.user.profile is not None:
        username = review.user.profile.display_name
    return ReviewResponse(
        review_id=review.id,
        book_id=review.book_id,
        username=username,
        rating=review.rating,
        content=review.content,
        created_at=review.created_at,
    )


class ReviewService:

    @staticmethod
    async def list_reviews(db: AsyncSession, book_id: int) -> List[ReviewResponse]:
        reviews = await ReviewRepository.list_by_book(db, book_id)
        return [to_review_response(r) for r in reviews]

    @staticmethod
    async def add_review(db: AsyncSession, user_id: int, book_id: int, data: ReviewCreate) -> Review:
        async with transaction(db):
            user = await UserRepository.get_by_id(db, user_id)
            if user is None:
                raise UserNotFound(user_id)
            book = await BookRepository.get_by_id(db, book_id)
            if book is None:
                raise BookNotFound(book_id)
            if data.rating < 1 or data.rating > 5:
                raise ValidationError("Rating must be between 1 and 5")

            review = Review(user=user, book_id=book.id, rating=data.rating, content=data.content)
            await ReviewRepository.add(db, review)
        logger.info("review_added", review_id=review.id, book_id=book_id, user_id=user_id)
        return review
