"""
Registration, login and account administration.

Credentials (email, password hash, active flag) live on `User`; the display
name and role live on `Profile`. Tokens carry the user id as subject, never
the email.
"""
from typing import List

import structlog
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import transaction
from shared.errors import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    UserNotFound,
    ValidationError,
)
from shared.security.jwt_handler import create_member_token

from .models import Profile, Role, User
from .repository import UserRepository
from .schemas import PasswordChange, ProfileUpdate, TokenResponse, UserCreate, UserLogin

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def parse_role(raw: str) -> Role:
    try:
        return Role(raw.strip().upper())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid role name: {raw}")


class AuthService:

    @staticmethod
    def _hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        async with transaction(db):
            if await UserRepository.exists_by_email(db, data.email):
                raise ConflictError("Email already registered")
            user = User(
                email=data.email,
                hashed_password=AuthService._hash_password(data.password),
                profile=Profile(display_name=data.display_name, role=Role.USER),
            )
            await UserRepository.add(db, user)
        logger.info("user_registered", user_id=user.id)
        return user

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> TokenResponse:
        user = await UserRepository.get_by_email(db, data.email)
        if not user or not AuthService._verify_password(data.password, user.hashed_password):
            raise AuthenticationError("Incorrect email or password")
        if not user.is_active:
            raise PermissionDeniedError("Account is disabled")

        role = user.profile.role if user.profile else Role.USER
        token = create_member_token(user.id, role.value)
        logger.info("user_logged_in", user_id=user.id)
        return TokenResponse(access_token=token, role=role.value)

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    @staticmethod
    async def update_profile(db: AsyncSession, user_id: int, data: ProfileUpdate) -> User:
        async with transaction(db):
            user = await AuthService.get_user_by_id(db, user_id)
            # Blank fields are left untouched
            if data.display_name is not None and data.display_name.strip():
                user.profile.display_name = data.display_name.strip()
            await UserRepository.save(db, user)
        return user

    @staticmethod
    async def change_password(db: AsyncSession, user_id: int, data: PasswordChange) -> None:
        async with transaction(db):
            user = await AuthService.get_user_by_id(db, user_id)
            if not AuthService._verify_password(data.old_password, user.hashed_password):
                raise ValidationError("Old password is incorrect, please try again.")
            if data.old_password == data.new_password:
                raise ValidationError("New password must differ from the old password.")
            user.hashed_password = AuthService._hash_password(data.new_password)
            await UserRepository.save(db, user)
        logger.info("password_changed", user_id=user_id)

    # --- Admin ---

    @staticmethod
    async def list_users(db: AsyncSession) -> List[User]:
        return await UserRepository.list_all(db)

    @staticmethod
    async def toggle_active(db: AsyncSession, user_id: int) -> User:
        async with transaction(db):
            user = await AuthService.get_user_by_id(db, user_id)
            user.is_active = not user.is_active
            await UserRepository.save(db, user)
        logger.info("user_active_toggled", user_id=user_id, is_active=user.is_active)
        return user

    @staticmethod
    async def update_role(db: AsyncSession, user_id: int, role_name: str) -> User:
        role = parse_role(role_name)
        async with transaction(db):
            user = await AuthService.get_user_by_id(db, user_id)
            user.profile.role = role
            await UserRepository.save(db, user)
        logger.info("user_role_updated", user_id=user_id, role=role.value)
        return user

    @staticmethod
    async def deactivate(db: AsyncSession, user_id: int) -> None:
        """Soft delete: the account stays, with its order history, but cannot log in."""
        async with transaction(db):
            user = await AuthService.get_user_by_id(db, user_id)
            if not user.is_active:
                raise ConflictError("Account is already deactivated.")
            user.is_active = False
            await UserRepository.save(db, user)
        logger.info("user_deactivated", user_id=user_id)

    @staticmethod
    async def ensure_admin(db: AsyncSession, email: str, password: str, display_name: str) -> bool:
        """Creates the seed admin account unless the email is already taken."""
        async with transaction(db):
            if await UserRepository.exists_by_email(db, email):
                return False
            admin = User(
                email=email,
                hashed_password=AuthService._hash_password(password),
                profile=Profile(display_name=display_name, role=Role.ADMIN),
            )
            await UserRepository.add(db, admin)
        logger.info("admin_account_created", user_id=admin.id)
        return True
