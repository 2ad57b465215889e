"""
Tests for vote endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from repositories.vote_repository import DuplicateVoteError


@pytest.fixture
def live_ballot(period_repo, vote_repo, make_period, make_candidate):
    """Latest period is live, candidate 5 stands in it and the voter has not voted."""
    period = make_period()
    period_repo.get_latest.return_value = period
    period_repo.get_candidate.return_value = make_candidate(5, "B")
    vote_repo.has_voted.return_value = False
    return period


@pytest.mark.unit
class TestCastVote:
    """Test POST /api/vote."""

    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.post("/api/vote", json={"candidateId": 5})

        assert response.status_code in (401, 403)

    async def test_casts_vote(self, client: AsyncClient, live_ballot, vote_repo, voter, auth_headers) -> None:
        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 200
        assert response.json() == {"success": True, "candidateId": 5, "candidateName": "B"}
        vote_repo.cast.assert_awaited_once_with("user-123", 1, 5)

    async def test_no_period(self, client: AsyncClient, period_repo, voter, auth_headers) -> None:
        period_repo.get_latest.return_value = None

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 400
        assert response.json()["detail"] == "No voting session"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"forced_ended": True},
            {"results_published": True},
        ],
    )
    async def test_closed_period(
        self, client: AsyncClient, period_repo, vote_repo, make_period, voter, auth_headers, overrides
    ) -> None:
        period_repo.get_latest.return_value = make_period(**overrides)

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 400
        assert response.json()["detail"] == "Voting is not active"
        vote_repo.cast.assert_not_awaited()

    async def test_upcoming_period(
        self, client: AsyncClient, period_repo, make_period, now, voter, auth_headers
    ) -> None:
        period_repo.get_latest.return_value = make_period(
            start_time=now + timedelta(hours=1), end_time=now + timedelta(hours=2)
        )

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.json()["detail"] == "Voting is not active"

    async def test_ineligible_voter(
        self, client: AsyncClient, period_repo, live_ballot, voter, auth_headers
    ) -> None:
        live_ballot.scope = "state"
        live_ballot.scope_state = "Oyo"

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 403
        assert response.json()["detail"] == "Restricted to Oyo"

    async def test_invalid_candidate(
        self, client: AsyncClient, period_repo, live_ballot, voter, auth_headers
    ) -> None:
        period_repo.get_candidate.return_value = None

        response = await client.post("/api/vote", json={"candidateId": 42}, headers=auth_headers(voter))

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid candidate"
        period_repo.get_candidate.assert_awaited_once_with(42, 1)

    async def test_already_voted(
        self, client: AsyncClient, vote_repo, live_ballot, voter, auth_headers
    ) -> None:
        vote_repo.has_voted.return_value = True

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 400
        assert response.json()["detail"] == "You already voted"
        vote_repo.cast.assert_not_awaited()

    async def test_concurrent_duplicate(
        self, client: AsyncClient, vote_repo, live_ballot, voter, auth_headers
    ) -> None:
        vote_repo.cast.side_effect = DuplicateVoteError("You already voted")

        response = await client.post("/api/vote", json={"candidateId": 5}, headers=auth_headers(voter))

        assert response.status_code == 400
        assert response.json()["detail"] == "You already voted"


@pytest.mark.unit
class TestVoteStatus:
    """Test GET /api/vote/status."""

    async def test_voted_in_latest_period(
        self, client: AsyncClient, period_repo, vote_repo, make_period, make_candidate, voter, auth_headers
    ) -> None:
        period_repo.get_latest.return_value = make_period(id=3)
        vote_repo.get_voted_candidate.return_value = make_candidate(5, "B")

        response = await client.get("/api/vote/status", headers=auth_headers(voter))

        assert response.status_code == 200
        assert response.json() == {"hasVoted": True, "periodId": 3, "youVoted": {"id": 5, "name": "B"}}
        vote_repo.get_voted_candidate.assert_awaited_once_with("user-123", 3)

    async def test_not_voted_in_given_period(
        self, client: AsyncClient, vote_repo, voter, auth_headers
    ) -> None:
        vote_repo.get_voted_candidate.return_value = None

        response = await client.get("/api/vote/status", params={"periodId": 7}, headers=auth_headers(voter))

        assert response.json()["hasVoted"] is False
        assert response.json()["periodId"] == 7

    async def test_no_period(self, client: AsyncClient, period_repo, voter, auth_headers) -> None:
        period_repo.get_latest.return_value = None

        response = await client.get("/api/vote/status", headers=auth_headers(voter))

        assert response.json()["hasVoted"] is False
