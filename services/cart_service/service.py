from decimal import Decimal
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.repository import UserRepository
from services.catalog_service.repository import BookRepository
from shared.config.database import transaction
from shared.errors import BookNotFound, CartItemNotFound, InsufficientStock, InvalidQuantity, UserNotFound

from .models import CartItem
from .repository import CartRepository
from .schemas import CartItemRequest, CartItemResponse, CartResponse

logger = structlog.get_logger(__name__)


def to_cart_response(items: List[CartItem]) -> CartResponse:
    """Prices shown here are live catalog prices; checkout re-reads them anyway."""
    views = []
    total = Decimal("0.00")
    for item in items:
        book = item.book
        price = book.price if book is not None else None
        subtotal = price * item.quantity if price is not None else Decimal("0.00")
        total += subtotal
        views.append(
            CartItemResponse(
                id=item.id,
                book_id=item.book_id,
                book_title=book.title if book is not None else None,
                unit_price=price,
                quantity=item.quantity,
                subtotal=subtotal,
            )
        )
    return CartResponse(items=views, total=total)


class CartService:

    @staticmethod
    async def get_cart(db: AsyncSession, user_id: int) -> List[CartItem]:
        return await CartRepository.list_by_user(db, user_id)

    @staticmethod
    async def add_or_update_item(db: AsyncSession, user_id: int, data: CartItemRequest) -> CartItem:
        """Adds a book to the cart, or replaces the quantity if it is already there."""
        if data.quantity <= 0:
            raise InvalidQuantity()

        async with transaction(db):
            if await UserRepository.get_by_id(db, user_id) is None:
                raise UserNotFound(user_id)
            book = await BookRepository.get_by_id(db, data.book_id)
            if book is None:
                raise BookNotFound(data.book_id)
            if not book.is_onsale or data.quantity > book.stock:
                raise InsufficientStock(book.title, book.stock)

            item = await CartRepository.get_by_user_and_book(db, user_id, book.id)
            if item is None:
                item = CartItem(user_id=user_id, book_id=book.id, quantity=data.quantity)
                item.book = book
            else:
                item.quantity = data.quantity
            await CartRepository.save(db, item)

        logger.info("cart_item_saved", user_id=user_id, book_id=book.id, quantity=data.quantity)
        return item

    @staticmethod
    async def remove_item(db: AsyncSession, user_id: int, cart_item_id: int) -> None:
        async with transaction(db):
            item = await CartRepository.get_owned(db, cart_item_id, user_id)
            if item is None:
                raise CartItemNotFound(cart_item_id)
            await CartRepository.delete_item(db, item)
        logger.info("cart_item_removed", user_id=user_id, cart_item_id=cart_item_id)

    @staticmethod
    async def clear_cart(db: AsyncSession, user_id: int) -> None:
        async with transaction(db):
            await CartRepository.clear(db, user_id)
