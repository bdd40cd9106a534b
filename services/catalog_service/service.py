from datetime import date
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import transaction
from shared.errors import BookNotFound, ConflictError, ValidationError

from .models import Book, Language
from .repository import BookRepository
from .schemas import BookRequest

logger = structlog.get_logger(__name__)


def parse_language(raw: str | None) -> Language:
    if raw is None or not raw.strip():
        raise ValidationError("Language must not be empty")
    try:
        return Language(raw.strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid language: {raw}") from None


def _validate_request(data: BookRequest) -> None:
    if data.title is None or not data.title.strip():
        raise ValidationError("Title must not be empty")
    if data.price is not None and data.price < 0:
        raise ValidationError("Price cannot be negative")
    if data.stock is not None and data.stock < 0:
        raise ValidationError("Stock cannot be negative")


class CatalogService:

    # --- Storefront queries (on-sale books only) ---

    @staticmethod
    async def list_onsale_by_lang(db: AsyncSession, lang: str) -> List[Book]:
        return await BookRepository.get_onsale_by_lang(db, parse_language(lang))

    @staticmethod
    async def search_onsale(db: AsyncSession, keyword: str) -> List[Book]:
        return await BookRepository.search_onsale(db, keyword.strip())

    @staticmethod
    async def get_onsale_book(db: AsyncSession, book_id: int) -> Book:
        book = await BookRepository.get_by_id(db, book_id)
        if book is None or not book.is_onsale:
            raise BookNotFound(book_id)
        return book

    # --- Catalog management ---

    @staticmethod
    async def list_all(db: AsyncSession) -> List[Book]:
        return await BookRepository.get_all(db)

    @staticmethod
    async def create_book(db: AsyncSession, data: BookRequest) -> Book:
        _validate_request(data)
        async with transaction(db):
            if data.isbn and await BookRepository.exists_by_isbn(db, data.isbn):
                raise ConflictError("ISBN already exists")
            book = Book(
                title=data.title.strip(),
                author=data.author,
                isbn=data.isbn,
                price=data.price,
                stock=data.stock,
                lang=parse_language(data.lang),
                is_onsale=data.is_onsale if data.is_onsale is not None else False,
                description=data.description,
                image_url=data.image_url,
                published_date=data.published_date or date.today(),
            )
            await BookRepository.add(db, book)
        logger.info("book_created", book_id=book.id, title=book.title)
        return book

    @staticmethod
    async def update_book(db: AsyncSession, book_id: int, data: BookRequest) -> Book:
        _validate_request(data)
        async with transaction(db):
            book = await BookRepository.get_for_update(db, book_id)
            if book is None:
                raise BookNotFound(book_id)
            book.lang = parse_language(data.lang)
            book.title = data.title.strip()
            book.author = data.author
            book.price = data.price
            book.stock = data.stock
            book.description = data.description
            book.image_url = data.image_url
            book.published_date = data.published_date
            if data.is_onsale is not None:
                book.is_onsale = data.is_onsale
            await BookRepository.save(db, book)
        logger.info("book_updated", book_id=book.id)
        return book

    @staticmethod
    async def set_onsale(db: AsyncSession, book_id: int, onsale: bool) -> Book:
        async with transaction(db):
            book = await BookRepository.get_by_id(db, book_id)
            if book is None:
                raise BookNotFound(book_id)
            book.is_onsale = onsale
            await BookRepository.save(db, book)
        logger.info("book_onsale_changed", book_id=book_id, is_onsale=onsale)
        return book
