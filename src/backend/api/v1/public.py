"""
Public voting period endpoints.

Serves the vote and past-results pages:
- latest period with its resolved status and countdown
- periods a user took part in
- candidates of a period
- results, gated on participation and publication
"""

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import get_current_user, get_current_user_optional
from repositories.period_repository import PeriodRepository
from repositories.provider import get_period_repository, get_vote_repository
from repositories.vote_repository import VoteRepository
from schemas.converters import period_model_to_schema
from schemas.period import CandidatePublic, Period
from schemas.profile import UserInDB
from schemas.results import CandidateResult, PublicResults
from schemas.vote import PeriodResults, VotedCandidate
from services.result_access import ensure_results_visible, public_results, rank_candidates

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/period", response_model=Optional[Period])
async def get_latest_period(
    periods: PeriodRepository = Depends(get_period_repository),
) -> Optional[Period]:
    """
    Get the most recent voting period.

    Returns None when no period has been created yet.
    """
    period = await periods.get_latest()
    if period is None:
        return None
    return period_model_to_schema(period)


@router.get("/periods", response_model=list[Period])
async def get_participated_periods(
    user_id: Annotated[str, Query(alias="userId", min_length=1)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> list[Period]:
    """List the periods a user voted in, newest first."""
    rows = await periods.list_participated(user_id)
    return [period_model_to_schema(p) for p in rows]


@router.get("/candidates", response_model=list[CandidatePublic])
async def get_candidates(
    period_id: Annotated[Optional[int], Query(alias="periodId")] = None,
    periods: PeriodRepository = Depends(get_period_repository),
) -> list[CandidatePublic]:
    """List a period's candidates without their vote counts."""
    if period_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="periodId required")
    candidates = await periods.list_candidates(period_id)
    return [CandidatePublic.model_validate(c) for c in candidates]


@router.get("/public-results", response_model=PublicResults)
async def get_public_results(
    period_id: Annotated[int, Query(alias="periodId")],
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
    current_user: Annotated[Optional[UserInDB], Depends(get_current_user_optional)] = None,
    periods: PeriodRepository = Depends(get_period_repository),
    votes: VoteRepository = Depends(get_vote_repository),
) -> PublicResults:
    """
    Results for the past-results page.

    Users who did not vote in the period get ``noParticipation: true`` and
    no tallies; tallies appear only once results are published. The bearer
    token identifies the user when ``userId`` is omitted.
    """
    period = await periods.get_by_id(period_id)
    if period is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Period not found")

    voter_id = user_id or (current_user.id if current_user else None)
    has_voted = bool(voter_id) and await votes.has_voted(voter_id, period_id)

    candidates = await periods.list_candidates(period_id)
    return public_results(period, candidates, has_voted)


@router.get("/results", response_model=PeriodResults)
async def get_results(
    current_user: Annotated[UserInDB, Depends(get_current_user)],
    period_id: Annotated[Optional[int], Query(alias="periodId")] = None,
    periods: PeriodRepository = Depends(get_period_repository),
    votes: VoteRepository = Depends(get_vote_repository),
) -> PeriodResults:
    """
    Full results of a period for an authenticated participant.

    Raises 403 until results are published, and for users who did not vote.
    """
    if period_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="periodId required")

    period = await periods.get_by_id(period_id)
    if period is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Period not found")

    has_voted = await votes.has_voted(current_user.id, period_id)
    ensure_results_visible(period, has_voted)

    candidates = rank_candidates(await periods.list_candidates(period_id))
    voted = await votes.get_voted_candidate(current_user.id, period_id)

    logger.info("results_viewed", period_id=period_id, user_id=current_user.id)

    return PeriodResults(
        period=period_model_to_schema(period),
        candidates=[CandidateResult.model_validate(c) for c in candidates],
        you_voted=VotedCandidate(id=voted.id, name=voted.name) if voted else None,
    )
