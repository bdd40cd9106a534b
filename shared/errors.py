"""
Typed business errors shared by every service.

Services raise these instead of HTTPException. The single
handler installed by `register_exception_handlers` turns them into the
`{"detail": ...}` body FastAPI clients already expect.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- Taxonomy ---

class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class DataIntegrityError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN


# --- Concrete errors ---

class UserNotFound(NotFoundError):
    def __init__(self, user_id: int | None = None):
        message = "User not found" if user_id is None else f"User {user_id} not found"
        super().__init__(message)


class BookNotFound(NotFoundError):
    def __init__(self, book_id: int):
        super().__init__(f"Book {book_id} not found")


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: int, owned: bool = False):
        if owned:
            message = "Order does not exist or you do not have permission to view it."
        else:
            message = f"Order {order_id} not found"
        super().__init__(message)
        self.order_id = order_id


class CartItemNotFound(NotFoundError):
    def __init__(self, cart_item_id: int):
        super().__init__(f"Cart item {cart_item_id} not found")


class EmptyCart(ValidationError):
    def __init__(self):
        super().__init__("Cart is empty, nothing to check out")


class InvalidQuantity(ValidationError):
    def __init__(self):
        super().__init__("Quantity must be greater than 0")


class InvalidStatus(ValidationError):
    def __init__(self, raw: str | None):
        super().__init__(f"Unsupported order status: {raw}")


class InsufficientStock(ConflictError):
    def __init__(self, title: str, stock: int):
        super().__init__(
            f"{title} is out of stock or no longer on sale, cannot check out. Stock: {stock}"
        )
        self.title = title
        self.stock = stock


class IllegalCancellation(ConflictError):
    def __init__(self):
        super().__init__(
            "Paid orders cannot be cancelled directly; a refund workflow is required."
        )


class InvalidCartReference(DataIntegrityError):
    def __init__(self, cart_item_id: int):
        super().__init__("Cart contains an invalid item, please remove it and try again.")
        self.cart_item_id = cart_item_id


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info(
        "domain_error",
        error=type(exc).__name__,
        detail=exc.message,
        path=request.url.path,
        status_code=exc.status_code,
    )
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
