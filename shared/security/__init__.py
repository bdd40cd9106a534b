from .jwt_handler import create_access_token, create_member_token, verify_access_token
from .dependencies import get_current_user
from .rate_limiter import limiter, member_or_ip

__all__ = [
    "create_access_token",
    "create_member_token",
    "verify_access_token",
    "get_current_user",
    "limiter",
    "member_or_ip"
]
