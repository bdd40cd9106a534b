"""
Checkout: turns a user's cart into a priced, PENDING order.

The whole conversion is one transaction. Each book is re-read under a row
lock, checked against the quantity asked for, and decremented right away,
so a later line in the same cart (or a concurrent checkout waiting on the
lock) sees the reduced stock. Any failure rolls back every decrement, the
order and the cart deletion together.
"""
from decimal import Decimal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.repository import UserRepository
from services.cart_service.repository import CartRepository
from services.catalog_service.inventory import InventoryService
from services.catalog_service.repository import BookRepository
from shared.config.database import transaction
from shared.errors import EmptyCart, InvalidCartReference, UserNotFound
from shared.observability import bookstore_checkout_duration_seconds, bookstore_checkout_total

from .models import Order, OrderItem, OrderStatus
from .repository import OrderRepository
from .schemas import CheckoutRequest, CheckoutResponse

logger = structlog.get_logger(__name__)


class CheckoutEngine:

    @staticmethod
    async def checkout(db: AsyncSession, user_id: int, request: CheckoutRequest) -> CheckoutResponse:
        log = logger.bind(user_id=user_id)
        with bookstore_checkout_duration_seconds.time():
            try:
                async with transaction(db):
                    order = await CheckoutEngine._place_order(db, user_id, request)
            except Exception as e:
                bookstore_checkout_total.labels(status="failed").inc()
                log.warning("checkout_failed", error=type(e).__name__, detail=str(e))
                raise

        bookstore_checkout_total.labels(status="success").inc()
        log.info(
            "checkout_completed",
            order_id=order.id,
            total_price=str(order.total_price),
            line_items=len(order.items),
        )
        return CheckoutResponse(
            order_id=order.id,
            message=f"Checkout successful! Order ID: {order.id}",
        )

    @staticmethod
    async def _place_order(db: AsyncSession, user_id: int, request: CheckoutRequest) -> Order:
        # 1. Resolve the buyer
        user = await UserRepository.get_by_id(db, user_id)
        if user is None:
            raise UserNotFound(user_id)

        # 2. Snapshot the cart
        cart_items = await CartRepository.list_by_user(db, user_id)
        if not cart_items:
            raise EmptyCart()

        order = Order(
            user_id=user.id,
            status=OrderStatus.PENDING,
            payment_method=request.payment_method,
            recipient_name=request.recipient_name,
            recipient_phone=request.recipient_phone,
            shipping_address=request.shipping_address,
        )
        total = Decimal("0.00")

        # 3. Lock, check and decrement each book in cart order
        for cart_item in cart_items:
            book = None
            if cart_item.book_id is not None:
                book = await BookRepository.get_for_update(db, cart_item.book_id)
            if book is None:
                log = logger.bind(user_id=user_id, cart_item_id=cart_item.id, book_id=cart_item.book_id)
                log.error("checkout_invalid_cart_reference")
                raise InvalidCartReference(cart_item.id)

            await InventoryService.reserve(db, book, cart_item.quantity)

            # Price is whatever the catalog says now, not when the item was carted
            subtotal = book.price * cart_item.quantity
            order.items.append(
                OrderItem(
                    book_id=book.id,
                    book_title=book.title,
                    quantity=cart_item.quantity,
                    unit_price=book.price,
                    subtotal=subtotal,
                )
            )
            total += subtotal

        # 4. Persist the order with its line items
        order.total_price = total
        await OrderRepository.add(db, order)

        # 5. The cart has been consumed
        await CartRepository.delete_items(db, cart_items)
        return order
