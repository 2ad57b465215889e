"""
Period and Result Access Policy

Results of a voting period are only shown to users who voted in it, and
only once an administrator has published them. Voting itself is only
accepted while the period is live.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from schemas.results import CandidateResult, PublicResults
from services.session_timing import SessionPhase, resolve_session_timing

RESULTS_NOT_PUBLISHED = "Results not published yet"
DID_NOT_PARTICIPATE = "You did not participate in this session"


class AccessDenied(Exception):
    """The caller may not see the requested period data."""

    def __init__(self, message: str, http_status: int = 403, code: str = "FORBIDDEN"):
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.code = code

    @property
    def payload(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


@dataclass(frozen=True)
class ResultAccess:
    """What a given user may see of a period's results."""

    no_participation: bool
    published: bool

    @property
    def visible(self) -> bool:
        return self.published and not self.no_participation


def is_voting_open(period: Any, now: Optional[datetime] = None) -> bool:
    """True while the period accepts votes."""
    return resolve_session_timing(period, now).phase == SessionPhase.LIVE


def resolve_result_access(period: Any, has_voted: bool) -> ResultAccess:
    published = resolve_session_timing(period).results_published
    return ResultAccess(no_participation=not has_voted, published=published)


def rank_candidates(candidates: Iterable[Any]) -> list[Any]:
    """Order candidates by votes, most first; ties go to the newest entry."""
    return sorted(candidates, key=lambda c: (c.votes or 0, c.id), reverse=True)


def public_results(period: Any, candidates: Iterable[Any], has_voted: bool) -> PublicResults:
    """Build the past-results payload for one user and period."""
    access = resolve_result_access(period, has_voted)
    results: list[CandidateResult] = []
    if access.visible:
        results = [CandidateResult.model_validate(c) for c in rank_candidates(candidates)]
    return PublicResults(
        no_participation=access.no_participation,
        published=access.published,
        results=results,
    )


def ensure_results_visible(period: Any, has_voted: bool) -> None:
    """
    Raise AccessDenied unless the user may see the period's results.

    Publication is checked before participation.
    """
    access = resolve_result_access(period, has_voted)
    if not access.published:
        raise AccessDenied(RESULTS_NOT_PUBLISHED)
    if access.no_participation:
        raise AccessDenied(DID_NOT_PARTICIPATE)
