from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.errors import PermissionDeniedError
from shared.security.dependencies import get_current_user

from .models import Role
from .repository import UserRepository


async def get_current_member(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> int:
    """Dependency for member routes. Rejects accounts deactivated after the token was issued."""
    user = await UserRepository.get_by_id(db, user_id)
    if user is None or not user.is_active:
        raise PermissionDeniedError("Account is disabled")
    return user_id


async def get_current_admin(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> int:
    """Dependency for admin routes. The role is read from the database, not the token."""
    user = await UserRepository.get_by_id(db, user_id)
    if user is None or not user.is_active or user.profile is None or user.profile.role != Role.ADMIN:
        raise PermissionDeniedError("Administrator privileges required")
    return user_id
