"""
Field validation for raw profile and election records.

Admin tooling and import jobs hand us loosely-shaped dictionaries with
camelCase keys. The builders here trim and check every field, then return
a normalized Pydantic model. Failures raise ``FieldValidationError``, whose
``payload`` is forwarded verbatim as the API error body.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from schemas.election import Election, ElectionScope, ElectionStatus
from schemas.profile import UserProfile, UserRole

T = TypeVar("T")

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class ValidationCode(str, Enum):
    """Machine-readable validation failure codes."""

    MISSING_FIELD = "MISSING_FIELD"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_ROLE = "INVALID_ROLE"
    URL_VALIDATION_FAILED = "URL_VALIDATION_FAILED"
    INVALID_PERIOD = "INVALID_PERIOD"


class FieldValidationError(Exception):
    """A raw record failed validation."""

    def __init__(self, code: ValidationCode, message: str, http_status: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status

    @property
    def payload(self) -> dict[str, Any]:
        return {"error": {"code": self.code.value, "message": self.message}}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: FieldValidationError


Result = Union[Ok[T], Err]


def as_string(value: Any, field: str) -> str:
    """Return the trimmed string, or fail if it is missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise FieldValidationError(ValidationCode.MISSING_FIELD, f"Field '{field}' is required")
    return value.strip()


def as_array(value: Any, field: str) -> list[Any] | tuple[Any, ...]:
    """Return the sequence unchanged, or fail if it is not a list."""
    if not isinstance(value, (list, tuple)):
        raise FieldValidationError(ValidationCode.INVALID_TYPE, f"Field '{field}' must be an array")
    return value


def is_http_url(value: Any) -> bool:
    """True if ``value`` is an absolute http(s) URL."""
    if not isinstance(value, str):
        return False
    try:
        _HTTP_URL.validate_python(value.strip())
    except ValidationError:
        return False
    return True


def build_user_profile(raw: Mapping[str, Any]) -> UserProfile:
    """Validate and normalize a raw user profile record."""
    user_id = as_string(raw.get("userId"), "userId")
    name = as_string(raw.get("name"), "name")
    profile_picture = as_string(raw.get("profilePicture"), "profilePicture")
    if not is_http_url(profile_picture):
        raise FieldValidationError(
            ValidationCode.URL_VALIDATION_FAILED,
            "Field 'profilePicture' must be a valid, publicly accessible URL.",
        )
    state = as_string(raw.get("state"), "state")
    local_government = as_string(raw.get("localGovernment"), "localGovernment")

    role = as_string(raw.get("role"), "role").lower()
    if role not in (UserRole.ADMIN.value, UserRole.USER.value):
        raise FieldValidationError(ValidationCode.INVALID_ROLE, "Field 'role' must be 'admin' or 'user'.")

    registered = raw.get("registeredElections")
    registered_elections = as_array([] if registered is None else registered, "registeredElections")

    return UserProfile(
        user_id=user_id,
        name=name,
        profile_picture=profile_picture,
        state=state,
        local_government=local_government,
        role=UserRole(role),
        registered_elections=list(registered_elections),
    )


def build_election(raw: Mapping[str, Any]) -> Election:
    """
    Validate and normalize a raw election record.

    ``state`` is required for state elections and ``localGovernment`` for
    local-government elections. Whichever conditional field does not apply
    to the scope is dropped from the result, even if the caller sent it.
    """
    election_id = as_string(raw.get("electionId"), "electionId")
    scope = as_string(raw.get("scope"), "scope")
    if scope not in {s.value for s in ElectionScope}:
        raise FieldValidationError(
            ValidationCode.INVALID_TYPE,
            "Field 'scope' must be 'national' | 'state' | 'localGovernment'",
        )

    state = None
    local_government = None
    if scope == ElectionScope.STATE.value:
        state = as_string(raw.get("state"), "state")
    if scope == ElectionScope.LOCAL_GOVERNMENT.value:
        local_government = as_string(raw.get("localGovernment"), "localGovernment")

    voters = raw.get("eligibleVoterIds")
    eligible_voter_ids = as_array([] if voters is None else voters, "eligibleVoterIds")

    status = as_string(raw.get("status"), "status")
    if status not in {s.value for s in ElectionStatus}:
        raise FieldValidationError(
            ValidationCode.INVALID_TYPE,
            "Field 'status' must be 'open'|'closed'|'upcoming'",
        )

    return Election(
        election_id=election_id,
        scope=ElectionScope(scope),
        state=state,
        local_government=local_government,
        eligible_voter_ids=list(eligible_voter_ids),
        status=ElectionStatus(status),
    )


def validate_period_window(start_time: datetime, end_time: datetime) -> None:
    """Reject voting periods that end before they start."""
    if start_time > end_time:
        raise FieldValidationError(
            ValidationCode.INVALID_PERIOD,
            "Field 'endTime' must not be earlier than 'startTime'.",
        )


def validate(builder: Callable[[Mapping[str, Any]], T], raw: Mapping[str, Any]) -> Result[T]:
    """Run a builder and return ``Ok``/``Err`` instead of raising."""
    try:
        return Ok(builder(raw))
    except FieldValidationError as e:
        return Err(e)
