import pytest

from services.auth_service.models import Role
from services.auth_service.repository import UserRepository
from services.auth_service.schemas import PasswordChange, ProfileUpdate, UserCreate, UserLogin
from services.auth_service.service import AuthService, parse_role
from shared.errors import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    UserNotFound,
    ValidationError,
)
from shared.security import verify_access_token

DEFAULT_PASSWORD = "secret123"


async def test_register_creates_user_with_member_role(db):
    user = await AuthService.register(
        db, UserCreate(email="new@bookstore.com", password="hunter22", display_name="Newcomer")
    )

    assert user.id is not None
    assert user.profile.role is Role.USER
    assert user.profile.display_name == "Newcomer"
    assert user.hashed_password != "hunter22"


async def test_register_rejects_duplicate_email(db, make_user):
    await make_user(email="taken@bookstore.com")

    with pytest.raises(ConflictError, match="Email already registered"):
        await AuthService.register(
            db, UserCreate(email="taken@bookstore.com", password="hunter22", display_name="Copycat")
        )


async def test_login_token_carries_user_id_and_role(db, make_user):
    user = await make_user(email="admin@bookstore.com", role=Role.ADMIN)

    token = await AuthService.login(db, UserLogin(email="admin@bookstore.com", password=DEFAULT_PASSWORD))

    assert token.token_type == "bearer"
    assert token.role == "ADMIN"
    payload = verify_access_token(token.access_token)
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "ADMIN"


async def test_login_rejects_wrong_password_and_unknown_email(db, make_user):
    await make_user(email="reader@bookstore.com")

    with pytest.raises(AuthenticationError):
        await AuthService.login(db, UserLogin(email="reader@bookstore.com", password="wrong-password"))
    with pytest.raises(AuthenticationError):
        await AuthService.login(db, UserLogin(email="nobody@bookstore.com", password=DEFAULT_PASSWORD))


async def test_disabled_account_cannot_log_in(db, make_user):
    await make_user(email="gone@bookstore.com", is_active=False)

    with pytest.raises(PermissionDeniedError, match="Account is disabled"):
        await AuthService.login(db, UserLogin(email="gone@bookstore.com", password=DEFAULT_PASSWORD))


async def test_update_profile_ignores_blank_display_name(db, make_user):
    user = await make_user(display_name="Reader")

    await AuthService.update_profile(db, user.id, ProfileUpdate(display_name="   "))
    assert user.profile.display_name == "Reader"

    await AuthService.update_profile(db, user.id, ProfileUpdate(display_name=" Bookworm "))
    assert user.profile.display_name == "Bookworm"


async def test_change_password_rules(db, make_user):
    user = await make_user(email="reader@bookstore.com")
    user_id = user.id

    with pytest.raises(ValidationError, match="Old password is incorrect"):
        await AuthService.change_password(
            db, user_id, PasswordChange(old_password="not-it", new_password="brand-new")
        )
    with pytest.raises(ValidationError, match="must differ"):
        await AuthService.change_password(
            db, user_id, PasswordChange(old_password=DEFAULT_PASSWORD, new_password=DEFAULT_PASSWORD)
        )

    await AuthService.change_password(
        db, user_id, PasswordChange(old_password=DEFAULT_PASSWORD, new_password="brand-new")
    )
    token = await AuthService.login(db, UserLogin(email="reader@bookstore.com", password="brand-new"))
    assert token.access_token


async def test_admin_account_management(db, make_user):
    user = await make_user()
    user_id = user.id

    toggled = await AuthService.toggle_active(db, user_id)
    assert toggled.is_active is False
    toggled = await AuthService.toggle_active(db, user_id)
    assert toggled.is_active is True

    promoted = await AuthService.update_role(db, user_id, "admin")
    assert promoted.profile.role is Role.ADMIN

    await AuthService.deactivate(db, user_id)
    with pytest.raises(ConflictError, match="already deactivated"):
        await AuthService.deactivate(db, user_id)

    with pytest.raises(UserNotFound):
        await AuthService.toggle_active(db, 999)


def test_parse_role_rejects_unknown_role():
    assert parse_role(" user ") is Role.USER
    with pytest.raises(ValidationError):
        parse_role("SUPERUSER")


async def test_ensure_admin_is_idempotent(db):
    created = await AuthService.ensure_admin(db, "root@bookstore.com", "admin-pass", "Store Admin")
    again = await AuthService.ensure_admin(db, "root@bookstore.com", "other-pass", "Someone Else")

    assert created is True
    assert again is False
    admin = await UserRepository.get_by_email(db, "root@bookstore.com")
    assert admin.profile.role is Role.ADMIN
    assert admin.profile.display_name == "Store Admin"
    assert len(await UserRepository.list_all(db)) == 1
