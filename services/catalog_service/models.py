import enum

from sqlalchemy import Boolean, Column, Date, Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import validates

from shared.config.database import Base


class Language(str, enum.Enum):
    ENGLISH = "ENGLISH"
    JAPANESE = "JAPANESE"
    KOREAN = "KOREAN"
    FRENCH = "FRENCH"
    GERMAN = "GERMAN"
    SPANISH = "SPANISH"
    CHINESE = "CHINESE"


class Book(Base):
    """Catalog entry and inventory record in one row."""
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=True)
    isbn = Column(String(20), unique=True, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    is_onsale = Column(Boolean, nullable=False, default=False)
    lang = Column(Enum(Language, name="book_language", native_enum=False), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    published_date = Column(Date, nullable=True)

    @validates("stock")
    def _check_stock(self, key, value):
        if value is not None and value < 0:
            raise ValueError(f"Stock for book {self.id} cannot go negative")
        return value

    @validates("price")
    def _check_price(self, key, value):
        if value is not None and value < 0:
            raise ValueError("Price cannot be negative")
        return value
