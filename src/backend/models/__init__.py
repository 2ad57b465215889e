"""Database models module."""

from models.user import User
from models.vote import EligibleVoter, Vote
from models.voting_period import Candidate, PeriodScope, VotingPeriod

__all__ = [
    "User",
    "VotingPeriod",
    "Candidate",
    "PeriodScope",
    "Vote",
    "EligibleVoter",
]
