"""
Admin endpoints for managing voting periods, profiles and elections.

All endpoints require an authenticated user with the admin role.
"""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status

from api.deps import get_current_admin_user
from core.validation import build_election, build_user_profile, validate_period_window
from repositories.period_repository import PeriodRepository
from repositories.provider import get_period_repository, get_user_repository
from repositories.user_repository import UserRepository
from schemas.converters import period_model_to_schema
from schemas.period import (
    CandidateActionResponse,
    CandidatePublic,
    CandidateUpdate,
    Period,
    PeriodActionResponse,
    PeriodCreate,
)
from schemas.profile import UserInDB
from services.period_lifecycle import ensure_cancellable, ensure_candidate_editable
from services.session_timing import SessionPhase, parse_timestamp, resolve_session_timing

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/profiles")
async def save_user_profile(
    raw: Annotated[dict[str, Any], Body()],
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    users: UserRepository = Depends(get_user_repository),
) -> dict[str, Any]:
    """Validate a raw user profile and store it."""
    profile = build_user_profile(raw)
    await users.upsert_profile(profile)
    logger.info("profile_saved", user_id=profile.user_id, role=profile.role.value, admin_id=admin.id)
    return profile.to_payload()


@router.post("/elections")
async def validate_election(
    raw: Annotated[dict[str, Any], Body()],
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
) -> dict[str, Any]:
    """Validate a raw election record and return its normalized form."""
    election = build_election(raw)
    return election.to_payload()


@router.get("/periods", response_model=list[Period])
async def list_periods(
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> list[Period]:
    """List every voting period, newest first."""
    return [period_model_to_schema(p) for p in await periods.list_all()]


@router.post("/periods", response_model=Period, status_code=status.HTTP_201_CREATED)
async def create_period(
    period_data: PeriodCreate,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> Period:
    """Schedule a new voting period with its candidates."""
    start_time = parse_timestamp(period_data.start_time)
    end_time = parse_timestamp(period_data.end_time)
    validate_period_window(start_time, end_time)

    period = await periods.create(
        start_time=start_time,
        end_time=end_time,
        candidates=[c.model_dump() for c in period_data.candidates],
        title=period_data.title,
        description=period_data.description,
        min_age=period_data.min_age,
        scope=period_data.scope.value,
        scope_state=period_data.scope_state,
        scope_lga=period_data.scope_lga,
        require_whitelist=period_data.require_whitelist,
    )

    logger.info(
        "period_created",
        period_id=period.id,
        start_time=start_time.isoformat(),
        end_time=end_time.isoformat(),
        candidates=len(period_data.candidates),
        admin_id=admin.id,
    )
    return period_model_to_schema(period)


@router.post("/periods/{period_id}/end-early", response_model=PeriodActionResponse)
async def end_period_early(
    period_id: int,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> PeriodActionResponse:
    """Stop voting before the scheduled end. Repeated calls are no-ops."""
    period = await periods.get_by_id(period_id)
    if period is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Voting period not found")

    if period.forced_ended or period.results_published:
        return PeriodActionResponse(already=True, period_id=period_id)

    changed = await periods.mark_forced_ended(period_id)
    logger.info("period_ended_early", period_id=period_id, admin_id=admin.id)
    return PeriodActionResponse(already=not changed, period_id=period_id)


@router.post("/periods/{period_id}/publish-results", response_model=PeriodActionResponse)
async def publish_results(
    period_id: int,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> PeriodActionResponse:
    """
    Make a closed period's results visible to its participants.

    Repeated calls are no-ops; periods still upcoming or live are rejected.
    """
    period = await periods.get_by_id(period_id)
    if period is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Voting period not found")

    if period.results_published:
        return PeriodActionResponse(already=True, period_id=period_id)

    if resolve_session_timing(period).phase != SessionPhase.CLOSED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Results can only be published after voting closes",
        )

    changed = await periods.mark_results_published(period_id)
    logger.info("results_published", period_id=period_id, admin_id=admin.id)
    return PeriodActionResponse(already=not changed, period_id=period_id)


@router.post("/periods/{period_id}/cancel", response_model=PeriodActionResponse)
async def cancel_period(
    period_id: int,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> PeriodActionResponse:
    """
    Withdraw a scheduled period before voting starts.

    The period is deleted together with its candidates. Periods that have
    already started get 409 and must be ended early instead.
    """
    period = await periods.get_by_id(period_id)
    if period is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Voting period not found")

    ensure_cancellable(period)

    await periods.delete_period(period_id)
    logger.info("period_cancelled", period_id=period_id, admin_id=admin.id)
    return PeriodActionResponse(period_id=period_id)


@router.put("/candidates/{candidate_id}", response_model=CandidatePublic)
async def update_candidate(
    candidate_id: int,
    candidate_data: CandidateUpdate,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> CandidatePublic:
    """Edit a candidate while its ballot is still upcoming."""
    candidate = await periods.get_candidate_by_id(candidate_id)
    if candidate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate not found")

    ensure_candidate_editable(await periods.get_by_id(candidate.period_id))

    updated = await periods.update_candidate(candidate, **candidate_data.model_dump())
    logger.info("candidate_updated", candidate_id=candidate_id, admin_id=admin.id)
    return CandidatePublic.model_validate(updated)


@router.delete("/candidates/{candidate_id}", response_model=CandidateActionResponse)
async def remove_candidate(
    candidate_id: int,
    admin: Annotated[UserInDB, Depends(get_current_admin_user)],
    periods: PeriodRepository = Depends(get_period_repository),
) -> CandidateActionResponse:
    """Take a candidate off a ballot that has not opened yet."""
    candidate = await periods.get_candidate_by_id(candidate_id)
    if candidate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate not found")

    ensure_candidate_editable(await periods.get_by_id(candidate.period_id))

    await periods.delete_candidate(candidate_id)
    logger.info("candidate_removed", candidate_id=candidate_id, admin_id=admin.id)
    return CandidateActionResponse(candidate_id=candidate_id)
