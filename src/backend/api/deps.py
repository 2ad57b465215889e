"""
Shared dependencies for API endpoints.

Includes:
- JWT bearer authentication
- Admin role enforcement
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.security import decode_token
from models.user import User
from repositories.provider import get_user_repository
from repositories.user_repository import UserRepository
from schemas.profile import UserInDB, UserRole

logger = structlog.get_logger(__name__)

# Security schemes
security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)


def _user_model_to_schema(user: User) -> UserInDB:
    """Convert a User SQLAlchemy model to a UserInDB Pydantic schema."""
    return UserInDB(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=UserRole(user.role) if user.role in ("admin", "user") else UserRole.USER,
        state=user.state,
        local_government=user.local_government,
        national_id=user.national_id,
        date_of_birth=user.date_of_birth,
    )


async def _resolve_user(token: str, users: UserRepository) -> UserInDB | None:
    payload = decode_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    user = await users.get_by_id(str(user_id))
    if not user:
        return None

    return _user_model_to_schema(user)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    users: UserRepository = Depends(get_user_repository),
) -> UserInDB:
    """
    Extract and validate the current user from the JWT token.

    Raises:
        HTTPException: If token is invalid or user not found.
    """
    user = await _resolve_user(credentials.credentials, users)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_optional)],
    users: UserRepository = Depends(get_user_repository),
) -> UserInDB | None:
    """
    Optionally extract the current user from the JWT token.

    Returns None if no token is provided or token is invalid.
    """
    if credentials is None:
        return None
    return await _resolve_user(credentials.credentials, users)


async def get_current_admin_user(
    current_user: Annotated[UserInDB, Depends(get_current_user)],
) -> UserInDB:
    """Require an authenticated administrator."""
    if not current_user.is_admin:
        logger.warning("admin_access_denied", user_id=current_user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
