"""
User repository for database operations.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.profile import UserProfile


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def upsert_profile(self, profile: UserProfile) -> User:
        """Create the user or overwrite its profile fields."""
        user = await self.get_by_id(profile.user_id)
        if user is None:
            user = User(id=profile.user_id)
            self.db.add(user)

        user.name = profile.name
        user.profile_picture = profile.profile_picture
        user.state = profile.state
        user.local_government = profile.local_government
        user.role = profile.role.value
        user.registered_elections = list(profile.registered_elections)

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def create(self, name: str, email: Optional[str] = None, role: str = "user", **kwargs) -> User:
        user = User(name=name, email=email, role=role, **kwargs)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user
