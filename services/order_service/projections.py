from .models import Order, OrderItem
from .schemas import OrderDetail, OrderItemView, OrderSummary

DEFAULT_PAYMENT_METHOD = "UNKNOWN"


def payment_method_label(order: Order) -> str:
    return order.payment_method or DEFAULT_PAYMENT_METHOD


def to_item_view(item: OrderItem) -> OrderItemView:
    return OrderItemView(
        order_item_id=item.id,
        book_id=item.book_id,
        book_title=item.book_title,
        quantity=item.quantity,
        price=item.unit_price,
        subtotal=item.subtotal,
    )


def to_summary(order: Order) -> OrderSummary:
    return OrderSummary(
        order_id=order.id,
        status=order.status.value,
        total_price=order.total_price,
        payment_method=payment_method_label(order),
        created_at=order.created_at,
    )


def to_detail(order: Order) -> OrderDetail:
    return OrderDetail(
        order_id=order.id,
        user_id=order.user_id,
        status=order.status.value,
        total_price=order.total_price,
        payment_method=payment_method_label(order),
        created_at=order.created_at,
        recipient_name=order.recipient_name,
        recipient_phone=order.recipient_phone,
        shipping_address=order.shipping_address,
        items=[to_item_view(item) for item in order.items],
    )
