from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config import settings
from shared.config.database import AsyncSessionLocal, Base, engine
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.catalog_service import models as catalog_models  # noqa: F401
from services.cart_service import models as cart_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.review_service import models as review_models  # noqa: F401

from services.auth_service.router import admin_router as admin_users_router
from services.auth_service.router import router as auth_router
from services.auth_service.service import AuthService
from services.cart_service.router import router as cart_router
from services.catalog_service.router import admin_router as admin_books_router
from services.catalog_service.router import public_router as books_router
from services.order_service.router import admin_router as admin_orders_router
from services.order_service.router import router as orders_router
from services.review_service.router import router as reviews_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bookstore API",
        version="1.0.0",
        description="Catalog, cart, checkout and order management for an online bookstore.",
    )

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(app, "bookstore")

    # --- ERROR + SECURITY SETUP ---
    register_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.get("/health", include_in_schema=False)
    async def health_check():
        return {"service": "bookstore", "status": "running"}

    app.include_router(auth_router)
    app.include_router(admin_users_router)
    app.include_router(reviews_router)
    app.include_router(books_router)
    app.include_router(admin_books_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(admin_orders_router)

    @app.on_event("startup")
    async def startup_event():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
            async with AsyncSessionLocal() as db:
                await AuthService.ensure_admin(
                    db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_DISPLAY_NAME
                )

    return app


app = create_app()
