import os

# Must be in place before any app module is imported
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["OTEL_ENABLED"] = "false"
os.environ["METRICS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from main import app
from services.auth_service.models import Profile, Role, User
from services.auth_service.service import AuthService
from services.cart_service.models import CartItem
from services.catalog_service.models import Book, Language
from shared.config.database import Base, get_db
from shared.security import create_member_token

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
async def engine(tmp_path):
    # A file database so the test session and request sessions use separate connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookstore.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# --- Seed helpers ---

@pytest.fixture
def make_user(db):
    async def _make(email="reader@bookstore.com", display_name="Reader", role=Role.USER,
                    password=DEFAULT_PASSWORD, is_active=True) -> User:
        user = User(
            email=email,
            hashed_password=AuthService._hash_password(password),
            is_active=is_active,
            profile=Profile(display_name=display_name, role=role),
        )
        db.add(user)
        await db.commit()
        return user
    return _make


@pytest.fixture
def make_book(db):
    async def _make(title="Dune", price="100.00", stock=10, is_onsale=True,
                    lang=Language.ENGLISH, author="Frank Herbert", isbn=None) -> Book:
        book = Book(
            title=title,
            author=author,
            isbn=isbn,
            price=Decimal(price),
            stock=stock,
            is_onsale=is_onsale,
            lang=lang,
        )
        db.add(book)
        await db.commit()
        return book
    return _make


@pytest.fixture
def add_to_cart(db):
    async def _add(user_id: int, book_id, quantity: int) -> CartItem:
        item = CartItem(user_id=user_id, book_id=book_id, quantity=quantity)
        db.add(item)
        await db.commit()
        return item
    return _add


@pytest.fixture
def stock_of(db):
    """Reads the committed stock straight from the table."""
    async def _stock(book_id: int) -> int:
        return await db.scalar(select(Book.stock).where(Book.id == book_id))
    return _stock


@pytest.fixture
def cart_count(db):
    async def _count(user_id: int) -> int:
        result = await db.execute(select(CartItem.id).where(CartItem.user_id == user_id))
        return len(result.all())
    return _count


def auth_headers(user: User) -> dict:
    role = user.profile.role.value if user.profile else Role.USER.value
    token = create_member_token(user.id, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
