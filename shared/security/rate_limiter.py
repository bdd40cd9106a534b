from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.config import settings


def member_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    slowapi checks the limit after FastAPI has resolved the route's dependencies,
    so on member routes `get_current_user` has already put the user id on
    `request.state`. Anonymous routes (register, login) fall back to the client IP.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return f"member:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=member_or_ip, enabled=settings.RATE_LIMIT_ENABLED)
