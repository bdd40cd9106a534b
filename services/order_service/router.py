from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_admin, get_current_member
from shared.config import settings
from shared.config.database import get_db
from shared.security import limiter

from .schemas import CheckoutRequest, CheckoutResponse, OrderDetail, OrderSummary, StatusUpdate
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

# THIS PROTECTS THE ENTIRE ADMIN ORDER CONSOLE
admin_router = APIRouter(
    prefix="/admin/orders",
    tags=["Admin: Orders"],
    dependencies=[Depends(get_current_admin)],
)


@router.post("/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.CHECKOUT_RATE_LIMIT)
async def checkout(
    request: Request,
    payload: CheckoutRequest,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.checkout(db, user_id, payload)


@router.get("", response_model=List[OrderSummary])
async def list_my_orders(user_id: int = Depends(get_current_member), db: AsyncSession = Depends(get_db)):
    return await OrderService.list_orders(db, user_id)


@router.get("/{order_id}", response_model=OrderDetail)
async def get_my_order(
    order_id: int,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.get_order_detail(db, order_id, user_id)


@router.post("/{order_id}/cancel", response_model=OrderDetail)
async def cancel_my_order(
    order_id: int,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.cancel_order(db, order_id, user_id)


@admin_router.get("", response_model=List[OrderSummary])
async def list_all_orders(db: AsyncSession = Depends(get_db)):
    return await OrderService.list_orders(db)


@admin_router.get("/{order_id}", response_model=OrderDetail)
async def get_any_order(order_id: int, db: AsyncSession = Depends(get_db)):
    return await OrderService.get_order_detail(db, order_id)


@admin_router.patch("/{order_id}/status", response_model=OrderDetail)
async def update_order_status(order_id: int, payload: StatusUpdate, db: AsyncSession = Depends(get_db)):
    return await OrderService.admin_update_status(db, order_id, payload.status)
