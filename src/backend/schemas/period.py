"""
Voting period Pydantic schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from models.voting_period import PeriodScope
from schemas.common import CamelModel


class PeriodStatusEnum(str, Enum):
    """Coarse period status shown by the frontend."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"


class CandidateCreate(CamelModel):
    """Candidate entered together with a new period."""

    name: str = Field(..., min_length=1, max_length=200)
    state: Optional[str] = None
    lga: Optional[str] = None
    photo_url: Optional[str] = None


class CandidatePublic(CamelModel):
    """Candidate as listed on the ballot (no vote count)."""

    id: int
    name: str
    lga: Optional[str] = None
    photo_url: Optional[str] = None


class PeriodCreate(CamelModel):
    """Schema for scheduling a new voting period."""

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    min_age: Optional[int] = Field(None, ge=0, le=150)
    scope: PeriodScope = PeriodScope.NATIONAL
    scope_state: Optional[str] = None
    scope_lga: Optional[str] = None
    require_whitelist: bool = False
    candidates: list[CandidateCreate] = Field(default_factory=list)


class Period(CamelModel):
    """Voting period with its timing resolved against the current time."""

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    min_age: Optional[int] = None
    scope: str = PeriodScope.NATIONAL.value
    scope_state: Optional[str] = None
    scope_lga: Optional[str] = None
    require_whitelist: bool = False
    forced_ended: bool = False
    results_published: bool = False
    status: PeriodStatusEnum = PeriodStatusEnum.UPCOMING
    phase: str = "closed"
    countdown_ms: int = 0
    countdown: str = "0s"


class PeriodActionResponse(CamelModel):
    """Result of an idempotent admin action on a period."""

    success: bool = True
    already: bool = False
    period_id: Optional[int] = None


class CandidateUpdate(CamelModel):
    """Replacement ballot details for a candidate."""

    name: str = Field(..., min_length=1, max_length=200)
    state: str = Field(..., min_length=1, max_length=120)
    lga: str = Field(..., min_length=1, max_length=120)
    photo_url: Optional[str] = None


class CandidateActionResponse(CamelModel):
    success: bool = True
    candidate_id: int
