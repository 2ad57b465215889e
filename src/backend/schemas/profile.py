"""
User-related Pydantic schemas.
"""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from schemas.common import CamelModel


class UserRole(str, Enum):
    """Closed set of account roles."""

    ADMIN = "admin"
    USER = "user"


class UserProfile(CamelModel):
    """Normalized user profile produced by the field validator."""

    user_id: str
    name: str
    profile_picture: str
    state: str
    local_government: str
    role: UserRole
    registered_elections: list[Any] = Field(default_factory=list)


class UserInDB(BaseModel):
    """Authenticated user as seen by request handlers."""

    id: str
    name: str
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    state: Optional[str] = None
    local_government: Optional[str] = None
    national_id: Optional[str] = None
    date_of_birth: Optional[date] = None

    model_config = {"from_attributes": True}

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
