from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from .models import Language


class BookRequest(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    price: Decimal = Decimal("0.00")
    stock: int = 0
    lang: Optional[str] = None
    is_onsale: Optional[bool] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    published_date: Optional[date] = None


class OnsaleUpdate(BaseModel):
    is_onsale: bool


class BookResponse(BaseModel):
    id: int
    title: str
    author: Optional[str]
    isbn: Optional[str]
    price: Decimal
    stock: int
    is_onsale: bool
    lang: Language
    description: Optional[str]
    image_url: Optional[str]
    published_date: Optional[date]

    class Config:
        from_attributes = True
