from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CartItem


class CartRepository:

    @staticmethod
    async def list_by_user(db: AsyncSession, user_id: int) -> List[CartItem]:
        """The user's cart in the order the items were first added."""
        result = await db.execute(
            select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_user_and_book(db: AsyncSession, user_id: int, book_id: int) -> Optional[CartItem]:
        result = await db.execute(
            select(CartItem)
            .where(CartItem.user_id == user_id)
            .where(CartItem.book_id == book_id)
        )
        return result.scalars().first()

    @staticmethod
    async def get_owned(db: AsyncSession, cart_item_id: int, user_id: int) -> Optional[CartItem]:
        result = await db.execute(
            select(CartItem).where(CartItem.id == cart_item_id, CartItem.user_id == user_id)
        )
        return result.scalars().first()

    @staticmethod
    async def save(db: AsyncSession, item: CartItem) -> CartItem:
        db.add(item)
        await db.flush()
        return item

    @staticmethod
    async def delete_item(db: AsyncSession, item: CartItem) -> None:
        await db.delete(item)
        await db.flush()

    @staticmethod
    async def delete_items(db: AsyncSession, items: List[CartItem]) -> None:
        for item in items:
            await db.delete(item)
        await db.flush()

    @staticmethod
    async def clear(db: AsyncSession, user_id: int) -> None:
        await db.execute(delete(CartItem).where(CartItem.user_id == user_id))
