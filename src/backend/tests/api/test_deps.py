"""
Tests for API dependencies (deps.py).
"""

from datetime import date

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from api.deps import (
    _user_model_to_schema,
    get_current_admin_user,
    get_current_user,
    get_current_user_optional,
)
from core.security import create_access_token
from schemas.profile import UserInDB, UserRole


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.mark.unit
class TestUserModelToSchema:
    """Test the _user_model_to_schema helper."""

    def test_converts_user_row(self, voter) -> None:
        result = _user_model_to_schema(voter)

        assert isinstance(result, UserInDB)
        assert result.id == "user-123"
        assert result.role == UserRole.USER
        assert result.local_government == "Ikeja"
        assert result.date_of_birth == date(1990, 1, 1)
        assert result.is_admin is False

    def test_unknown_role_falls_back_to_user(self, voter) -> None:
        voter.role = "superuser"

        assert _user_model_to_schema(voter).role == UserRole.USER

    def test_admin_role(self, admin) -> None:
        assert _user_model_to_schema(admin).is_admin is True


@pytest.mark.unit
class TestCurrentUser:
    """Test bearer-token user resolution."""

    async def test_valid_token(self, user_repo) -> None:
        token = create_access_token({"sub": "user-123"})

        user = await get_current_user(_credentials(token), user_repo)

        assert user.id == "user-123"

    async def test_invalid_token(self, user_repo) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_credentials("not-a-jwt"), user_repo)

        assert exc_info.value.status_code == 401

    async def test_unknown_user(self, user_repo) -> None:
        token = create_access_token({"sub": "ghost"})

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_credentials(token), user_repo)

        assert exc_info.value.status_code == 401

    async def test_optional_without_credentials(self, user_repo) -> None:
        assert await get_current_user_optional(None, user_repo) is None

    async def test_optional_with_bad_token(self, user_repo) -> None:
        assert await get_current_user_optional(_credentials("garbage"), user_repo) is None


@pytest.mark.unit
class TestAdminUser:
    """Test admin role enforcement."""

    async def test_admin_passes(self) -> None:
        admin = UserInDB(id="admin-1", name="Admin", role=UserRole.ADMIN)

        assert await get_current_admin_user(admin) is admin

    async def test_regular_user_rejected(self) -> None:
        user = UserInDB(id="user-123", name="Ada")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_admin_user(user)

        assert exc_info.value.status_code == 403
