from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class CartItemRequest(BaseModel):
    book_id: int
    quantity: int


class CartItemResponse(BaseModel):
    id: int
    book_id: Optional[int]
    book_title: Optional[str]
    unit_price: Optional[Decimal]
    quantity: int
    subtotal: Decimal


class CartResponse(BaseModel):
    items: List[CartItemResponse] = []
    total: Decimal = Decimal("0.00")
