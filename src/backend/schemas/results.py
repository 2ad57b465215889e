"""
Result-related Pydantic schemas.
"""

from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class CandidateResult(CamelModel):
    """A candidate's standing in a published period."""

    name: str
    lga: Optional[str] = None
    photo_url: Optional[str] = None
    votes: int = 0


class PublicResults(CamelModel):
    """
    Results as shown on the past-results page.

    ``results`` is empty unless the user took part and the results are
    published.
    """

    no_participation: bool
    published: bool
    results: list[CandidateResult] = Field(default_factory=list)
