"""Repository modules for database access."""

from repositories.period_repository import PeriodRepository
from repositories.user_repository import UserRepository
from repositories.vote_repository import DuplicateVoteError, VoteRepository

__all__ = [
    "PeriodRepository",
    "VoteRepository",
    "UserRepository",
    "DuplicateVoteError",
]
