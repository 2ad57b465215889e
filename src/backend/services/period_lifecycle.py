"""
Period Lifecycle Guards

A ballot may only be changed while its period is still upcoming. Once
voting has started, or the period was ended early or published, its
candidates are locked and the period can no longer be cancelled.
"""

from datetime import datetime
from typing import Any, Optional

from services.session_timing import SessionPhase, resolve_session_timing

CANDIDATE_LOCKED = "This candidate is on a ballot that is already live or concluded."
PERIOD_ALREADY_STARTED = "This session has already started. Use end-early instead of cancelling."


class PeriodLocked(Exception):
    """The period has left the upcoming phase and can no longer be changed."""

    def __init__(self, code: str, message: str, http_status: int = 409):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status

    @property
    def payload(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


def is_upcoming(period: Any, now: Optional[datetime] = None) -> bool:
    return resolve_session_timing(period, now).phase == SessionPhase.UPCOMING


def ensure_candidate_editable(period: Any, now: Optional[datetime] = None) -> None:
    """
    Raise PeriodLocked unless the candidate's ballot is still upcoming.

    Candidates whose period no longer exists stay editable.
    """
    if period is None:
        return
    if not is_upcoming(period, now):
        raise PeriodLocked("LOCKED", CANDIDATE_LOCKED)


def ensure_cancellable(period: Any, now: Optional[datetime] = None) -> None:
    """Raise PeriodLocked unless the period has not started yet."""
    if not is_upcoming(period, now):
        raise PeriodLocked("ALREADY_STARTED", PERIOD_ALREADY_STARTED)
