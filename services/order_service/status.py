"""
Order status transitions.

    PENDING -> PAID | CANCELLED
    PAID    -> SHIPPED | CANCELLED (override only)
    CANCELLED is terminal; asking for CANCELLED again is a no-op.
    Owner-scoped calls (member cancellation) may only cancel PENDING orders.

Entering CANCELLED puts every line item's quantity back into stock. The
order row is locked for the duration, so two concurrent cancellations of the
same order restore stock once.
"""
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.inventory import InventoryService
from shared.config.database import transaction
from shared.errors import ConflictError, IllegalCancellation, InvalidStatus, OrderNotFound
from shared.observability import bookstore_order_status_transitions_total

from .models import Order, OrderStatus
from .repository import OrderRepository

logger = structlog.get_logger(__name__)


def parse_status(raw: str | None) -> OrderStatus:
    """Case and whitespace insensitive lookup of an OrderStatus name."""
    if raw is None:
        raise InvalidStatus(raw)
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError:
        raise InvalidStatus(raw) from None


class OrderStatusMachine:

    @staticmethod
    async def update_status(
        db: AsyncSession,
        order_id: int,
        requested: str,
        *,
        override: bool = False,
        owner_id: int | None = None,
    ) -> Order:
        """Applies `requested` to the order.

        `override` lifts the paid-order cancellation guard (admin use).
        `owner_id`, when given, restricts the update to that user's order.
        """
        async with transaction(db):
            order = await OrderRepository.get_for_update(db, order_id)
            if order is None or (owner_id is not None and order.user_id != owner_id):
                raise OrderNotFound(order_id, owned=owner_id is not None)

            target = parse_status(requested)
            current = order.status

            if current is OrderStatus.CANCELLED:
                if target is not OrderStatus.CANCELLED:
                    raise ConflictError(f"Order {order_id} is cancelled and cannot move to {target.value}")
                logger.info("order_already_cancelled", order_id=order_id)
                return order

            if target is OrderStatus.CANCELLED:
                if current is OrderStatus.PAID and not override:
                    raise IllegalCancellation()
                # Members may only withdraw orders that have not been paid or shipped
                if owner_id is not None and current is not OrderStatus.PENDING:
                    raise ConflictError(f"Order {order_id} is {current.value} and can no longer be cancelled")
                await OrderStatusMachine._restore_stock(db, order)

            order.status = target
            await OrderRepository.save(db, order)

        bookstore_order_status_transitions_total.labels(to_status=target.value).inc()
        logger.info(
            "order_status_updated",
            order_id=order_id,
            from_status=current.value,
            to_status=target.value,
            override=override,
        )
        return order

    @staticmethod
    async def _restore_stock(db: AsyncSession, order: Order) -> None:
        for item in order.items:
            await InventoryService.restore(db, item.book_id, item.quantity)
