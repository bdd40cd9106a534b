import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, event, inspect
from sqlalchemy.orm import relationship

from shared.config.database import Base
from shared.errors import DataIntegrityError


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(OrderStatus, name="order_status", native_enum=False),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    total_price = Column(Numeric(10, 2), nullable=False)  # snapshot, never recomputed
    payment_method = Column(String(50), nullable=True)  # label only
    recipient_name = Column(String(100), nullable=True)
    recipient_phone = Column(String(30), nullable=True)
    shipping_address = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    book_title = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)  # catalog price at checkout
    subtotal = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")


# Everything on an order except its status is frozen once it has been written.
_FROZEN_ORDER_FIELDS = (
    "user_id",
    "total_price",
    "payment_method",
    "recipient_name",
    "recipient_phone",
    "shipping_address",
    "created_at",
)


@event.listens_for(Order, "before_update")
def _reject_order_rewrite(mapper, connection, target):
    state = inspect(target)
    changed = [name for name in _FROZEN_ORDER_FIELDS if state.attrs[name].history.has_changes()]
    if changed:
        raise DataIntegrityError(f"Order {target.id} fields are immutable: {', '.join(changed)}")


@event.listens_for(OrderItem, "before_update")
def _reject_line_item_rewrite(mapper, connection, target):
    raise DataIntegrityError(f"Order line item {target.id} is immutable")
