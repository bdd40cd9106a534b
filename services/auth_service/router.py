from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import settings
from shared.config.database import get_db
from shared.security import limiter

from .dependencies import get_current_admin, get_current_member
from .schemas import (
    PasswordChange,
    ProfileUpdate,
    RoleUpdate,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Router-level dependency protects every admin endpoint
admin_router = APIRouter(
    prefix="/admin/users",
    tags=["Admin: Users"],
    dependencies=[Depends(get_current_admin)],
)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(request: Request, payload: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await AuthService.register(db, payload)
    return UserResponse.from_user(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(request: Request, payload: UserLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload)


@router.get("/me", response_model=UserResponse, summary="Get the current user's profile")
async def get_me(
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    return UserResponse.from_user(await AuthService.get_user_by_id(db, user_id))


@router.put("/me", response_model=UserResponse, summary="Update the current user's profile")
async def update_me(
    payload: ProfileUpdate,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    return UserResponse.from_user(await AuthService.update_profile(db, user_id, payload))


@router.post("/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    payload: PasswordChange,
    user_id: int = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    await AuthService.change_password(db, user_id, payload)


# --- Admin ---

@admin_router.get("", response_model=List[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return [UserResponse.from_user(u) for u in await AuthService.list_users(db)]


@admin_router.patch("/{user_id}/toggle-active", response_model=UserResponse)
async def toggle_active(user_id: int, db: AsyncSession = Depends(get_db)):
    return UserResponse.from_user(await AuthService.toggle_active(db, user_id))


@admin_router.patch("/{user_id}/role", response_model=UserResponse)
async def update_role(user_id: int, payload: RoleUpdate, db: AsyncSession = Depends(get_db)):
    return UserResponse.from_user(await AuthService.update_role(db, user_id, payload.role))


@admin_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(user_id: int, db: AsyncSession = Depends(get_db)):
    await AuthService.deactivate(db, user_id)
