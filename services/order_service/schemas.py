from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, StringConstraints

# Present and non-blank; nothing else is checked on these fields
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CheckoutRequest(BaseModel):
    payment_method: RequiredText
    recipient_name: RequiredText
    recipient_phone: RequiredText
    shipping_address: RequiredText


class CheckoutResponse(BaseModel):
    order_id: int
    message: str


class StatusUpdate(BaseModel):
    status: str


class OrderItemView(BaseModel):
    order_item_id: int
    book_id: int
    book_title: str
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderSummary(BaseModel):
    order_id: int
    status: str
    total_price: Decimal
    payment_method: str
    created_at: datetime


class OrderDetail(BaseModel):
    order_id: int
    user_id: int
    status: str
    total_price: Decimal
    payment_method: str
    created_at: datetime
    recipient_name: str | None
    recipient_phone: str | None
    shipping_address: str | None
    items: List[OrderItemView]
