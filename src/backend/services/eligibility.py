"""
Voter Eligibility

Decides whether a user may vote in a voting period:
- minimum age, measured on the day voting opens
- state / local-government scope restrictions
- optional whitelist of pre-registered voters
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

import structlog

from services.session_timing import parse_timestamp

logger = structlog.get_logger(__name__)

WhitelistLookup = Callable[[Optional[str], Optional[str]], Awaitable[bool]]


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    reason: Optional[str] = None


def _to_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


def calc_age_on(date_of_birth: Any, at: Any = None) -> Optional[int]:
    """Age in whole years on ``at`` (today if omitted), or None if unknown."""
    dob = _to_date(date_of_birth)
    on = _to_date(at or datetime.now(timezone.utc))
    if dob is None or on is None:
        return None
    age = on.year - dob.year
    if (on.month, on.day) < (dob.month, dob.day):
        age -= 1
    return age


def _key(value: Any) -> str:
    return str(value).strip().lower()


async def check_eligibility(user: Any, period: Any, whitelist: WhitelistLookup) -> Eligibility:
    """
    Check a user against a period's restrictions.

    ``user`` needs ``date_of_birth``, ``state``, ``local_government``,
    ``email`` and ``national_id``; ``period`` is a ``VotingPeriod`` row or
    anything with the same attributes. ``whitelist`` is awaited with the
    user's e-mail and national id only when the period requires it.
    """
    if period is None:
        return Eligibility(False, "No active period")

    min_age = int(period.min_age or 0)
    if min_age > 0:
        age = calc_age_on(user.date_of_birth, period.start_time)
        if age is None:
            return Eligibility(False, "Missing date of birth")
        if age < min_age:
            return Eligibility(False, f"Minimum age {min_age}")

    scope = _key(period.scope or "national")
    if scope in ("state", "local"):
        if not user.state or not period.scope_state:
            return Eligibility(False, "State restriction")
        if _key(user.state) != _key(period.scope_state):
            return Eligibility(False, f"Restricted to {period.scope_state}")
    if scope == "local":
        if not user.local_government or not period.scope_lga:
            return Eligibility(False, "LGA restriction")
        if _key(user.local_government) != _key(period.scope_lga):
            return Eligibility(False, f"Restricted to {period.scope_lga}")
    elif period.scope_lga and str(period.scope_lga).strip():
        # Periods created before scopes existed only carry an LGA
        if not user.local_government:
            return Eligibility(False, "Residence LGA not set")
        if _key(user.local_government) != _key(period.scope_lga):
            return Eligibility(False, f"Restricted to {period.scope_lga}")

    if period.require_whitelist:
        if not await whitelist(user.email or None, user.national_id or None):
            logger.info("eligibility_whitelist_miss", user_id=getattr(user, "id", None))
            return Eligibility(False, "Not on whitelist")

    return Eligibility(True)
