"""
Election-related Pydantic schemas.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field

from schemas.common import CamelModel


class ElectionScope(str, Enum):
    """Geographic reach of an election."""

    NATIONAL = "national"
    STATE = "state"
    LOCAL_GOVERNMENT = "localGovernment"


class ElectionStatus(str, Enum):
    """Election lifecycle status."""

    OPEN = "open"
    CLOSED = "closed"
    UPCOMING = "upcoming"


class Election(CamelModel):
    """
    Normalized election record.

    ``state`` is only present for state elections and ``local_government``
    only for local-government elections; ``to_payload()`` omits the other.
    """

    election_id: str
    scope: ElectionScope
    state: Optional[str] = None
    local_government: Optional[str] = None
    eligible_voter_ids: list[Any] = Field(default_factory=list)
    status: ElectionStatus
