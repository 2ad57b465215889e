"""
Voting period repository for database operations.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.vote import EligibleVoter, Vote
from models.voting_period import Candidate, PeriodScope, VotingPeriod


class PeriodRepository:
    """Repository for voting periods, their candidates and the voter whitelist."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _get_rowcount(self, result: Any) -> int:
        """Safely get rowcount from result."""
        return getattr(result, "rowcount", 0) or 0

    async def get_by_id(self, period_id: int) -> Optional[VotingPeriod]:
        result = await self.db.execute(select(VotingPeriod).where(VotingPeriod.id == period_id))
        return result.scalar_one_or_none()

    async def get_latest(self) -> Optional[VotingPeriod]:
        """Get the most recently created period."""
        result = await self.db.execute(select(VotingPeriod).order_by(VotingPeriod.id.desc()).limit(1))
        return result.scalar_one_or_none()

    async def list_participated(self, user_id: str) -> list[VotingPeriod]:
        """Periods the user cast a vote in, newest first."""
        result = await self.db.execute(
            select(VotingPeriod)
            .join(Vote, Vote.period_id == VotingPeriod.id)
            .where(Vote.user_id == user_id)
            .order_by(VotingPeriod.id.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[VotingPeriod]:
        result = await self.db.execute(select(VotingPeriod).order_by(VotingPeriod.id.desc()))
        return list(result.scalars().all())

    async def list_candidates(self, period_id: int) -> list[Candidate]:
        """Candidates of a period, newest first."""
        result = await self.db.execute(
            select(Candidate).where(Candidate.period_id == period_id).order_by(Candidate.id.desc())
        )
        return list(result.scalars().all())

    async def get_candidate(self, candidate_id: int, period_id: int) -> Optional[Candidate]:
        """Get a candidate only if it stands in the given period."""
        result = await self.db.execute(
            select(Candidate).where(
                Candidate.id == candidate_id,
                Candidate.period_id == period_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_candidate_by_id(self, candidate_id: int) -> Optional[Candidate]:
        result = await self.db.execute(select(Candidate).where(Candidate.id == candidate_id))
        return result.scalar_one_or_none()

    async def update_candidate(self, candidate: Candidate, **fields: Any) -> Candidate:
        """Overwrite a candidate's ballot details."""
        for key, value in fields.items():
            setattr(candidate, key, value)
        await self.db.commit()
        await self.db.refresh(candidate)
        return candidate

    async def delete_candidate(self, candidate_id: int) -> bool:
        result = await self.db.execute(delete(Candidate).where(Candidate.id == candidate_id))
        await self.db.commit()
        return self._get_rowcount(result) > 0

    async def delete_period(self, period_id: int) -> bool:
        """Remove a period with its votes and candidates. Returns False if it was already gone."""
        await self.db.execute(delete(Vote).where(Vote.period_id == period_id))
        await self.db.execute(delete(Candidate).where(Candidate.period_id == period_id))
        result = await self.db.execute(delete(VotingPeriod).where(VotingPeriod.id == period_id))
        await self.db.commit()
        return self._get_rowcount(result) > 0

    async def create(
        self,
        start_time: datetime,
        end_time: datetime,
        candidates: Iterable[dict[str, Any]] = (),
        title: Optional[str] = None,
        description: Optional[str] = None,
        min_age: Optional[int] = None,
        scope: str = PeriodScope.NATIONAL.value,
        scope_state: Optional[str] = None,
        scope_lga: Optional[str] = None,
        require_whitelist: bool = False,
    ) -> VotingPeriod:
        """Create a period together with its candidates."""
        period = VotingPeriod(
            title=title,
            description=description,
            start_time=start_time,
            end_time=end_time,
            min_age=min_age,
            scope=scope,
            scope_state=scope_state,
            scope_lga=scope_lga,
            require_whitelist=require_whitelist,
            forced_ended=False,
            results_published=False,
        )
        self.db.add(period)
        await self.db.flush()

        for data in candidates:
            self.db.add(Candidate(period_id=period.id, votes=0, **data))

        await self.db.commit()
        await self.db.refresh(period)
        return period

    async def mark_forced_ended(self, period_id: int) -> bool:
        """Flag a period as ended early. Returns False if it already was."""
        result = await self.db.execute(
            update(VotingPeriod)
            .where(VotingPeriod.id == period_id, VotingPeriod.forced_ended == False)  # noqa: E712
            .values(forced_ended=True)
        )
        await self.db.commit()
        return self._get_rowcount(result) > 0

    async def mark_results_published(self, period_id: int) -> bool:
        """Flag a period's results as published. Returns False if they already were."""
        result = await self.db.execute(
            update(VotingPeriod)
            .where(VotingPeriod.id == period_id, VotingPeriod.results_published == False)  # noqa: E712
            .values(results_published=True)
        )
        await self.db.commit()
        return self._get_rowcount(result) > 0

    async def is_whitelisted(self, email: Optional[str], voter_id: Optional[str]) -> bool:
        """True if the e-mail or national voter id is on the whitelist."""
        clauses = []
        if email:
            clauses.append(EligibleVoter.email == email)
        if voter_id:
            clauses.append(EligibleVoter.voter_id == voter_id)
        if not clauses:
            return False
        result = await self.db.execute(select(EligibleVoter.id).where(or_(*clauses)).limit(1))
        return result.scalar_one_or_none() is not None
