from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    display_name: str = Field(min_length=1, max_length=100)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: Optional[str]
    role: Optional[str]
    is_active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        profile = user.profile
        return cls(
            id=user.id,
            email=user.email,
            display_name=profile.display_name if profile else None,
            role=profile.role.value if profile else None,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, max_length=100)


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=6)


class RoleUpdate(BaseModel):
    role: str
