from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_member
from shared.config.database import get_db

from .schemas import CartItemRequest, CartResponse
from .service import CartService, to_cart_response

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(user_id: int = Depends(get_current_member), db: AsyncSession = Depends(get_db)):
    return to_cart_response(await CartService.get_cart(db, user_id))


@router.post("/items", response_model=CartResponse)
async def add_item(
    item: CartItemRequest,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    await CartService.add_or_update_item(db, user_id, item)
    return to_cart_response(await CartService.get_cart(db, user_id))


@router.delete("/items/{cart_item_id}", response_model=CartResponse)
async def remove_item(
    cart_item_id: int,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    await CartService.remove_item(db, user_id, cart_item_id)
    return to_cart_response(await CartService.get_cart(db, user_id))


@router.delete("/items", status_code=204)
async def clear_cart(user_id: int = Depends(get_current_member), db: AsyncSession = Depends(get_db)):
    """Deletes all items in the user's cart."""
    await CartService.clear_cart(db, user_id)
