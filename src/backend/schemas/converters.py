"""
Schema converter functions.

Centralized helpers for converting SQLAlchemy models to Pydantic schemas.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from schemas.period import Period, PeriodStatusEnum
from services.session_timing import SessionPhase, format_countdown, resolve_session_timing

if TYPE_CHECKING:
    from models.voting_period import VotingPeriod

_PHASE_TO_STATUS = {
    SessionPhase.UPCOMING: PeriodStatusEnum.UPCOMING,
    SessionPhase.LIVE: PeriodStatusEnum.ACTIVE,
    SessionPhase.CLOSED: PeriodStatusEnum.ENDED,
}


def period_model_to_schema(period: "VotingPeriod", now: Optional[datetime] = None) -> Period:
    """
    Convert a VotingPeriod row to a Period schema with resolved timing.

    Used by both public and admin endpoints.
    """
    timing = resolve_session_timing(period, now)
    return Period(
        id=period.id,
        title=period.title,
        description=period.description,
        start_time=period.start_time,
        end_time=period.end_time,
        min_age=period.min_age,
        scope=period.scope or "national",
        scope_state=period.scope_state,
        scope_lga=period.scope_lga,
        require_whitelist=bool(period.require_whitelist),
        forced_ended=bool(period.forced_ended),
        results_published=bool(period.results_published),
        status=_PHASE_TO_STATUS[timing.phase],
        phase=timing.phase.value,
        countdown_ms=timing.countdown_ms,
        countdown=format_countdown(timing.countdown_ms),
    )
