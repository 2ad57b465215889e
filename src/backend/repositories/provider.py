"""
Repository provider for dependency injection.

Usage:
    from repositories.provider import get_period_repository

    async def some_endpoint(
        periods: PeriodRepository = Depends(get_period_repository),
    ):
        period = await periods.get_latest()
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_db
from repositories.period_repository import PeriodRepository
from repositories.user_repository import UserRepository
from repositories.vote_repository import VoteRepository


def get_period_repository(db: AsyncSession = Depends(get_db)) -> PeriodRepository:
    return PeriodRepository(db)


def get_vote_repository(db: AsyncSession = Depends(get_db)) -> VoteRepository:
    return VoteRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
