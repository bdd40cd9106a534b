from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ReviewCreate(BaseModel):
    rating: int
    content: Optional[str] = None


class ReviewResponse(BaseModel):
    review_id: int
    book_id: int
    username: str
    rating: int
    content: Optional[str]
    created_at: datetime
