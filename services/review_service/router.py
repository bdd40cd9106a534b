from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_member
from shared.config.database import get_db

from .schemas import ReviewCreate, ReviewResponse
from .service import ReviewService, to_review_response

router = APIRouter(prefix="/books/{book_id}/reviews", tags=["Reviews"])


@router.get("", response_model=List[ReviewResponse])
async def list_reviews(book_id: int, db: AsyncSession = Depends(get_db)):
    return await ReviewService.list_reviews(db, book_id)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def add_review(
    book_id: int,
    payload: ReviewCreate,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    review = await ReviewService.add_review(db, user_id, book_id, payload)
    return to_review_response(review)
