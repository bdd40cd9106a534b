"""
Stock bookkeeping for orders.

`reserve` (checkout) and `restore` (cancellation) are the only order-driven
writes to `Book.stock`. Both expect to run inside the caller's transaction
and flush each change immediately, so a later read in the same unit of work
sees the new value and a rollback undoes all of them together.
"""
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import InsufficientStock, InvalidQuantity
from shared.observability import bookstore_stock_restored_total

from .models import Book
from .repository import BookRepository

logger = structlog.get_logger(__name__)


class InventoryService:

    @staticmethod
    async def reserve(db: AsyncSession, book: Book, quantity: int) -> Book:
        """Takes `quantity` units out of stock. The caller must hold the row lock."""
        if quantity <= 0:
            raise InvalidQuantity()
        if not book.is_onsale or quantity > book.stock:
            raise InsufficientStock(book.title, book.stock)

        book.stock -= quantity
        await BookRepository.save(db, book)
        logger.debug("stock_reserved", book_id=book.id, quantity=quantity, stock=book.stock)
        return book

    @staticmethod
    async def restore(db: AsyncSession, book_id: int, quantity: int) -> Optional[Book]:
        """Puts `quantity` units back. Returns None if the book no longer exists."""
        book = await BookRepository.get_for_update(db, book_id)
        if book is None:
            logger.warning("stock_restore_skipped", book_id=book_id, quantity=quantity)
            return None

        book.stock += quantity
        await BookRepository.save(db, book)
        bookstore_stock_restored_total.inc(quantity)
        logger.info("stock_restored", book_id=book.id, title=book.title, quantity=quantity, stock=book.stock)
        return book
