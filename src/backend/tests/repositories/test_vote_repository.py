"""
Tests for vote repository.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from models.vote import Vote
from repositories.vote_repository import DuplicateVoteError, VoteRepository


@pytest.mark.unit
class TestVoteRepository:
    """Test VoteRepository operations."""

    async def test_has_voted_true(self, mock_db_session) -> None:
        mock_db_session.execute = AsyncMock(return_value=MagicMock(scalar=MagicMock(return_value=1)))

        assert await VoteRepository(mock_db_session).has_voted("user-123", 1) is True

    async def test_has_voted_false(self, mock_db_session) -> None:
        mock_db_session.execute = AsyncMock(return_value=MagicMock(scalar=MagicMock(return_value=0)))

        assert await VoteRepository(mock_db_session).has_voted("user-123", 1) is False

    async def test_cast_records_vote_and_commits(self, mock_db_session) -> None:
        repo = VoteRepository(mock_db_session)

        vote = await repo.cast("user-123", period_id=1, candidate_id=5)

        assert isinstance(vote, Vote)
        assert (vote.user_id, vote.period_id, vote.candidate_id) == ("user-123", 1, 5)
        mock_db_session.add.assert_called_once_with(vote)
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    async def test_cast_twice_raises_duplicate(self, mock_db_session) -> None:
        mock_db_session.flush = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("uq_votes_user_period")))
        repo = VoteRepository(mock_db_session)

        with pytest.raises(DuplicateVoteError):
            await repo.cast("user-123", period_id=1, candidate_id=5)

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()
