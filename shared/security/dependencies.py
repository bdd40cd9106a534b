from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from shared.errors import AuthenticationError

from .jwt_handler import verify_access_token

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)) -> int:
    """Dependency to validate JWT and return the user ID (sub)."""
    if not token:
        raise AuthenticationError("Could not validate credentials")

    payload = verify_access_token(token)
    if payload is None:
        raise AuthenticationError("Could not validate credentials")

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise AuthenticationError("Could not validate credentials")

    # Store in request state for downstream use (like rate limiting)
    request.state.user_id = int(subject)
    request.state.role = payload.get("role")
    return int(subject)
