"""Schemas module initialization."""

from schemas.election import Election, ElectionScope, ElectionStatus
from schemas.period import (
    CandidateActionResponse,
    CandidateCreate,
    CandidatePublic,
    CandidateUpdate,
    Period,
    PeriodCreate,
)
from schemas.profile import UserInDB, UserProfile, UserRole
from schemas.results import CandidateResult, PublicResults
from schemas.vote import PeriodResults, VoteCreate, VoteResponse, VoteStatus

__all__ = [
    "Election",
    "ElectionScope",
    "ElectionStatus",
    "UserProfile",
    "UserInDB",
    "UserRole",
    "Period",
    "PeriodCreate",
    "CandidateCreate",
    "CandidatePublic",
    "CandidateUpdate",
    "CandidateActionResponse",
    "CandidateResult",
    "PublicResults",
    "PeriodResults",
    "VoteCreate",
    "VoteResponse",
    "VoteStatus",
]
