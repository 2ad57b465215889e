"""
Voting Session Timing

Classifies a voting period relative to a reference instant:
- upcoming: voting has not started yet
- live: start <= now <= end
- closed: voting is over, ended early, or results are already published

Nothing is stored; the phase is recomputed from (now, start, end) on
every call, so asking again later may give a different answer.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

logger = structlog.get_logger(__name__)

_ONE_MS = timedelta(milliseconds=1)
_DATETIME = TypeAdapter(datetime)


class SessionPhase(str, Enum):
    """Where a voting period stands relative to now."""

    UPCOMING = "upcoming"
    LIVE = "live"
    CLOSED = "closed"


@dataclass(frozen=True)
class SessionTiming:
    """
    Derived timing of a voting period.

    countdown_ms is the time to the next boundary for upcoming and live
    periods. For a period closed by the clock it is the time *elapsed* since
    the end, not zero. Display code treats it as a countdown regardless.
    """

    phase: SessionPhase
    countdown_ms: int
    forced_ended: bool = False
    results_published: bool = False


def _field(session: Any, *names: str) -> Any:
    """Read the first present attribute/key out of a mapping or ORM object."""
    for name in names:
        if isinstance(session, Mapping):
            if name in session:
                return session[name]
        elif hasattr(session, name):
            return getattr(session, name)
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Coerce a timestamp to an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings and epoch milliseconds. Naive
    values are taken as UTC. Returns None for anything unparsable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = _DATETIME.validate_python(value.strip())
        except ValidationError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _ms_between(later: datetime, earlier: datetime) -> int:
    return (later - earlier) // _ONE_MS


def resolve_session_timing(session: Any, now: Optional[datetime] = None) -> SessionTiming:
    """
    Resolve the phase and countdown of a voting period.

    ``session`` may be a dict with ``startTime``/``endTime`` (or snake_case)
    keys or an object such as a ``VotingPeriod`` row. Missing sessions and
    unparsable timestamps resolve to closed with a zero countdown; this
    function never raises.
    """
    if not session:
        return SessionTiming(phase=SessionPhase.CLOSED, countdown_ms=0)

    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    if current is None:
        current = datetime.now(timezone.utc)

    start = parse_timestamp(_field(session, "startTime", "start_time"))
    end = parse_timestamp(_field(session, "endTime", "end_time"))
    forced_ended = bool(_field(session, "forcedEnded", "forced_ended"))
    results_published = bool(_field(session, "resultsPublished", "results_published"))

    if start is None or end is None:
        logger.debug("session_timing_unparsable", start=_field(session, "startTime", "start_time"))
        return SessionTiming(
            phase=SessionPhase.CLOSED,
            countdown_ms=0,
            forced_ended=forced_ended,
            results_published=results_published,
        )

    if forced_ended:
        return SessionTiming(
            phase=SessionPhase.CLOSED,
            countdown_ms=0,
            forced_ended=True,
            results_published=results_published,
        )

    if results_published or current > end:
        return SessionTiming(
            phase=SessionPhase.CLOSED,
            countdown_ms=_ms_between(current, end) if current > end else 0,
            results_published=results_published,
        )

    if current < start:
        return SessionTiming(
            phase=SessionPhase.UPCOMING,
            countdown_ms=_ms_between(start, current),
            results_published=results_published,
        )

    return SessionTiming(
        phase=SessionPhase.LIVE,
        countdown_ms=_ms_between(end, current),
        results_published=results_published,
    )


def format_countdown(countdown_ms: Any) -> str:
    """
    Render a millisecond duration as at most three units, e.g. "1d 2h 5m".

    Days are shown when nonzero and always pull in hours. Minutes are shown
    when nonzero or when fewer than two units are present, and seconds only
    fill in for durations under a day.
    """
    if not countdown_ms or isinstance(countdown_ms, bool) or not isinstance(countdown_ms, (int, float)):
        return "0s"
    if not math.isfinite(countdown_ms) or countdown_ms <= 0:
        return "0s"

    total_seconds = int(countdown_ms // 1000)
    days = total_seconds // 86400
    hours = (total_seconds % 86400) // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if hours or days:
        parts.append(f"{hours}h")
    if minutes or len(parts) < 2:
        parts.append(f"{minutes}m")
    if len(parts) < 2 and days == 0:
        parts.append(f"{seconds}s")
    return " ".join(parts[:3])
