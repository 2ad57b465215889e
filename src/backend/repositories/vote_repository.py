"""
Vote repository for database operations.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.vote import Vote
from models.voting_period import Candidate


class DuplicateVoteError(Exception):
    """The user already has a vote in this period."""


class VoteRepository:
    """Repository for vote database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def has_voted(self, user_id: str, period_id: int) -> bool:
        result = await self.db.execute(
            select(func.count(Vote.id)).where(
                Vote.user_id == user_id,
                Vote.period_id == period_id,
            )
        )
        return (result.scalar() or 0) > 0

    async def get_voted_candidate(self, user_id: str, period_id: int) -> Optional[Candidate]:
        """The candidate the user voted for in a period, if any."""
        result = await self.db.execute(
            select(Candidate)
            .join(Vote, Vote.candidate_id == Candidate.id)
            .where(Vote.user_id == user_id, Vote.period_id == period_id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def cast(self, user_id: str, period_id: int, candidate_id: int) -> Vote:
        """
        Record a vote and bump the candidate's tally in one transaction.

        Raises:
            DuplicateVoteError: if the user already voted in the period.
        """
        vote = Vote(user_id=user_id, period_id=period_id, candidate_id=candidate_id)
        self.db.add(vote)
        try:
            await self.db.flush()
            await self.db.execute(
                update(Candidate).where(Candidate.id == candidate_id).values(votes=Candidate.votes + 1)
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateVoteError("You already voted") from e
        return vote
