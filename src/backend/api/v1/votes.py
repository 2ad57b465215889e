"""
Vote management endpoints.

Only authenticated users can vote, only in the latest period, and only
while that period is live. Each user gets one vote per period.
"""

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import get_current_user
from repositories.period_repository import PeriodRepository
from repositories.provider import get_period_repository, get_vote_repository
from repositories.vote_repository import DuplicateVoteError, VoteRepository
from schemas.profile import UserInDB
from schemas.vote import VoteCreate, VotedCandidate, VoteResponse, VoteStatus
from services.eligibility import check_eligibility
from services.result_access import is_voting_open

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/status", response_model=VoteStatus)
async def get_vote_status(
    current_user: Annotated[UserInDB, Depends(get_current_user)],
    period_id: Annotated[Optional[int], Query(alias="periodId")] = None,
    periods: PeriodRepository = Depends(get_period_repository),
    votes: VoteRepository = Depends(get_vote_repository),
) -> VoteStatus:
    """Whether the caller voted in the given (or latest) period, and for whom."""
    if period_id is None:
        latest = await periods.get_latest()
        if latest is None:
            return VoteStatus(has_voted=False)
        period_id = latest.id

    voted = await votes.get_voted_candidate(current_user.id, period_id)
    if voted is None:
        return VoteStatus(has_voted=False, period_id=period_id)
    return VoteStatus(
        has_voted=True,
        period_id=period_id,
        you_voted=VotedCandidate(id=voted.id, name=voted.name),
    )


@router.post("", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: Annotated[UserInDB, Depends(get_current_user)],
    periods: PeriodRepository = Depends(get_period_repository),
    votes: VoteRepository = Depends(get_vote_repository),
) -> VoteResponse:
    """
    Cast a vote in the latest period.

    Requirements:
    - Period must be live (not upcoming, ended early, or past its end)
    - User must satisfy the period's age, scope and whitelist rules
    - Candidate must stand in this period
    - User cannot vote twice in the same period
    """
    period = await periods.get_latest()
    if period is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No voting session")

    if not is_voting_open(period):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Voting is not active")

    eligibility = await check_eligibility(current_user, period, periods.is_whitelisted)
    if not eligibility.eligible:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=eligibility.reason)

    candidate = await periods.get_candidate(vote_data.candidate_id, period.id)
    if candidate is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid candidate")

    if await votes.has_voted(current_user.id, period.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You already voted")

    try:
        await votes.cast(current_user.id, period.id, candidate.id)
    except DuplicateVoteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("vote_cast", period_id=period.id, candidate_id=candidate.id)

    return VoteResponse(success=True, candidate_id=candidate.id, candidate_name=candidate.name)
