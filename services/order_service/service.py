from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import OrderNotFound

from .checkout import CheckoutEngine
from .models import OrderStatus
from .projections import to_detail, to_summary
from .repository import OrderRepository
from .schemas import CheckoutRequest, CheckoutResponse, OrderDetail, OrderSummary
from .status import OrderStatusMachine


class OrderService:
    @staticmethod
    async def checkout(db: AsyncSession, user_id: int, data: CheckoutRequest) -> CheckoutResponse:
        return await CheckoutEngine.checkout(db, user_id, data)

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: str) -> OrderDetail:
        """Guarded update: paid orders cannot be cancelled."""
        order = await OrderStatusMachine.update_status(db, order_id, status)
        return to_detail(order)

    @staticmethod
    async def admin_update_status(db: AsyncSession, order_id: int, status: str) -> OrderDetail:
        """Elevated update: may cancel paid orders. Stock is still restored exactly once."""
        order = await OrderStatusMachine.update_status(db, order_id, status, override=True)
        return to_detail(order)

    @staticmethod
    async def cancel_order(db: AsyncSession, order_id: int, user_id: int) -> OrderDetail:
        order = await OrderStatusMachine.update_status(
            db, order_id, OrderStatus.CANCELLED.value, owner_id=user_id
        )
        return to_detail(order)

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: Optional[int] = None) -> List[OrderSummary]:
        if user_id is None:
            orders = await OrderRepository.list_all(db)
        else:
            orders = await OrderRepository.list_by_user(db, user_id)
        return [to_summary(order) for order in orders]

    @staticmethod
    async def get_order_detail(db: AsyncSession, order_id: int, user_id: Optional[int] = None) -> OrderDetail:
        if user_id is None:
            order = await OrderRepository.get_order(db, order_id)
        else:
            order = await OrderRepository.get_order_for_user(db, order_id, user_id)
        if order is None:
            raise OrderNotFound(order_id, owned=user_id is not None)
        return to_detail(order)
