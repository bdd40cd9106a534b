from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from services.catalog_service.models import Book
from shared.config.database import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    # A re-add updates the existing row instead of duplicating it
    __table_args__ = (UniqueConstraint("user_id", "book_id", name="uq_cart_items_user_book"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Nullable: the catalog entry may be removed while still sitting in a cart
    book_id = Column(Integer, ForeignKey("books.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    book = relationship(Book, lazy="joined")
