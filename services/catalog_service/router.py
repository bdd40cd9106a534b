from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_admin
from shared.config.database import get_db

from .schemas import BookRequest, BookResponse, OnsaleUpdate
from .service import CatalogService

public_router = APIRouter(prefix="/books", tags=["Books"])

# THIS PROTECTS THE ENTIRE ADMIN CATALOG
admin_router = APIRouter(
    prefix="/admin/books",
    tags=["Admin: Books"],
    dependencies=[Depends(get_current_admin)],
)


@public_router.get("/lang/{lang}", response_model=List[BookResponse])
async def list_books_by_lang(lang: str, db: AsyncSession = Depends(get_db)):
    return await CatalogService.list_onsale_by_lang(db, lang)


@public_router.get("/search", response_model=List[BookResponse])
async def search_books(keyword: str = Query(min_length=1), db: AsyncSession = Depends(get_db)):
    return await CatalogService.search_onsale(db, keyword)


@public_router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, db: AsyncSession = Depends(get_db)):
    return await CatalogService.get_onsale_book(db, book_id)


@admin_router.get("", response_model=List[BookResponse])
async def list_all_books(db: AsyncSession = Depends(get_db)):
    return await CatalogService.list_all(db)


@admin_router.post("", response_model=BookResponse, status_code=201)
async def create_book(payload: BookRequest, db: AsyncSession = Depends(get_db)):
    return await CatalogService.create_book(db, payload)


@admin_router.put("/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, payload: BookRequest, db: AsyncSession = Depends(get_db)):
    return await CatalogService.update_book(db, book_id, payload)


@admin_router.patch("/{book_id}/status", response_model=BookResponse)
async def update_book_status(book_id: int, payload: OnsaleUpdate, db: AsyncSession = Depends(get_db)):
    return await CatalogService.set_onsale(db, book_id, payload.is_onsale)
