"""
Vote-related Pydantic schemas.
"""

from typing import Optional

from schemas.common import CamelModel
from schemas.period import Period
from schemas.results import CandidateResult


class VoteCreate(CamelModel):
    """Schema for casting a vote in the latest period."""

    candidate_id: int


class VotedCandidate(CamelModel):
    id: int
    name: str


class VoteResponse(CamelModel):
    """Response after successfully casting a vote."""

    success: bool
    candidate_id: int
    candidate_name: str


class VoteStatus(CamelModel):
    """Whether the caller has voted in a period, and for whom."""

    has_voted: bool
    period_id: Optional[int] = None
    you_voted: Optional[VotedCandidate] = None


class PeriodResults(CamelModel):
    """Full results of a published period for one of its voters."""

    period: Period
    candidates: list[CandidateResult]
    you_voted: Optional[VotedCandidate] = None
