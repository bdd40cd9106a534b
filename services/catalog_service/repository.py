from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Book, Language


class BookRepository:

    @staticmethod
    async def add(db: AsyncSession, book: Book) -> Book:
        db.add(book)
        await db.flush()
        return book

    @staticmethod
    async def save(db: AsyncSession, book: Book) -> Book:
        db.add(book)
        await db.flush()
        return book

    @staticmethod
    async def get_by_id(db: AsyncSession, book_id: int) -> Optional[Book]:
        result = await db.execute(select(Book).where(Book.id == book_id))
        return result.scalars().first()

    @staticmethod
    async def get_for_update(db: AsyncSession, book_id: int) -> Optional[Book]:
        """Loads the row under SELECT ... FOR UPDATE and refreshes any cached copy."""
        stmt = (
            select(Book)
            .where(Book.id == book_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def exists_by_isbn(db: AsyncSession, isbn: str) -> bool:
        result = await db.execute(select(Book.id).where(Book.isbn == isbn))
        return result.first() is not None

    @staticmethod
    async def get_all(db: AsyncSession) -> List[Book]:
        result = await db.execute(select(Book).order_by(Book.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_onsale_by_lang(db: AsyncSession, lang: Language) -> List[Book]:
        result = await db.execute(
            select(Book)
            .where(Book.lang == lang, Book.is_onsale.is_(True))
            .order_by(Book.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def search_onsale(db: AsyncSession, keyword: str) -> List[Book]:
        pattern = f"%{keyword.lower()}%"
        result = await db.execute(
            select(Book)
            .where(
                Book.is_onsale.is_(True),
                or_(func.lower(Book.title).like(pattern), func.lower(Book.author).like(pattern)),
            )
            .order_by(Book.id)
        )
        return list(result.scalars().all())
