from datetime import date
from decimal import Decimal

import pytest

from services.catalog_service.inventory import InventoryService
from services.catalog_service.models import Language
from services.catalog_service.schemas import BookRequest
from services.catalog_service.service import CatalogService, parse_language
from shared.errors import BookNotFound, ConflictError, InsufficientStock, InvalidQuantity, ValidationError


def book_request(**overrides) -> BookRequest:
    fields = {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "isbn": "9780441478125",
        "price": Decimal("15.99"),
        "stock": 4,
        "lang": "english",
    }
    fields.update(overrides)
    return BookRequest(**fields)


@pytest.mark.parametrize("raw, expected", [
    ("ENGLISH", Language.ENGLISH),
    (" japanese ", Language.JAPANESE),
    ("Korean", Language.KOREAN),
])
def test_parse_language(raw, expected):
    assert parse_language(raw) is expected


@pytest.mark.parametrize("raw", [None, "", "  ", "KLINGON"])
def test_parse_language_rejects_bad_values(raw):
    with pytest.raises(ValidationError):
        parse_language(raw)


async def test_create_book_defaults(db):
    book = await CatalogService.create_book(db, book_request())

    assert book.id is not None
    assert book.lang is Language.ENGLISH
    assert book.is_onsale is False
    assert book.published_date == date.today()


async def test_create_book_rejects_duplicate_isbn(db):
    await CatalogService.create_book(db, book_request())

    with pytest.raises(ConflictError, match="ISBN already exists"):
        await CatalogService.create_book(db, book_request(title="Another"))


@pytest.mark.parametrize("overrides, message", [
    ({"title": "  "}, "Title must not be empty"),
    ({"price": Decimal("-1.00")}, "Price cannot be negative"),
    ({"stock": -2}, "Stock cannot be negative"),
    ({"lang": "KLINGON"}, "Invalid language: KLINGON"),
])
async def test_create_book_validation(db, overrides, message):
    with pytest.raises(ValidationError) as exc_info:
        await CatalogService.create_book(db, book_request(**overrides))
    assert exc_info.value.message == message


async def test_storefront_only_shows_books_on_sale(db, make_book):
    visible = await make_book(title="Dune", author="Frank Herbert", lang=Language.ENGLISH)
    await make_book(title="Dune Messiah", author="Frank Herbert", is_onsale=False)
    await make_book(title="Norwegian Wood", author="Haruki Murakami", lang=Language.JAPANESE)

    english = await CatalogService.list_onsale_by_lang(db, "english")
    assert [book.id for book in english] == [visible.id]

    found = await CatalogService.search_onsale(db, "herbert")
    assert [book.title for book in found] == ["Dune"]

    found = await CatalogService.search_onsale(db, "WOOD")
    assert [book.title for book in found] == ["Norwegian Wood"]


async def test_off_sale_book_is_hidden_from_storefront(db, make_book):
    book = await make_book(is_onsale=False)
    book_id = book.id

    with pytest.raises(BookNotFound):
        await CatalogService.get_onsale_book(db, book_id)

    await CatalogService.set_onsale(db, book_id, True)
    assert (await CatalogService.get_onsale_book(db, book_id)).id == book_id


async def test_update_book(db, make_book):
    book = await make_book(title="Old Title", price="10.00", stock=1)

    updated = await CatalogService.update_book(
        db, book.id, book_request(title="New Title", price=Decimal("11.00"), stock=9, is_onsale=False)
    )

    assert updated.title == "New Title"
    assert updated.price == Decimal("11.00")
    assert updated.stock == 9
    assert updated.is_onsale is False


async def test_update_missing_book(db):
    with pytest.raises(BookNotFound):
        await CatalogService.update_book(db, 999, book_request())


async def test_reserve_refuses_to_oversell(db, make_book, stock_of):
    book = await make_book(title="Scarce", stock=2)

    with pytest.raises(InsufficientStock):
        await InventoryService.reserve(db, book, 3)
    with pytest.raises(InvalidQuantity):
        await InventoryService.reserve(db, book, 0)

    await InventoryService.reserve(db, book, 2)
    await db.commit()
    assert await stock_of(book.id) == 0


async def test_restore_missing_book_returns_none(db):
    assert await InventoryService.restore(db, 999, 1) is None


def test_book_model_rejects_negative_stock():
    from services.catalog_service.models import Book

    with pytest.raises(ValueError):
        Book(title="Broken", price=Decimal("1.00"), stock=-1, lang=Language.ENGLISH)
