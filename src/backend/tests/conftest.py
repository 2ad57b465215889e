"""
Pytest fixtures for Ballot backend tests.
"""

import os
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")
os.environ.setdefault("POSTGRES_DB", "ballot_test")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def make_period(now: datetime) -> Callable[..., SimpleNamespace]:
    """Factory for VotingPeriod-like rows; live for the next hour by default."""

    def _make(**overrides: Any) -> SimpleNamespace:
        data = {
            "id": 1,
            "title": "Governorship 2025",
            "description": "State-wide governorship election",
            "start_time": now - timedelta(hours=1),
            "end_time": now + timedelta(hours=1),
            "min_age": None,
            "scope": "national",
            "scope_state": None,
            "scope_lga": None,
            "require_whitelist": False,
            "forced_ended": False,
            "results_published": False,
        }
        data.update(overrides)
        return SimpleNamespace(**data)

    return _make


@pytest.fixture
def make_candidate() -> Callable[..., SimpleNamespace]:
    def _make(id: int, name: str, votes: int = 0, **overrides: Any) -> SimpleNamespace:
        data = {
            "id": id,
            "name": name,
            "state": "Lagos",
            "lga": "Ikeja",
            "photo_url": f"https://cdn.example.com/{id}.jpg",
            "votes": votes,
        }
        data.update(overrides)
        return SimpleNamespace(**data)

    return _make


@pytest.fixture
def voter() -> SimpleNamespace:
    """User row for a regular voter."""
    return SimpleNamespace(
        id="user-123",
        name="Ada Obi",
        email="ada@example.com",
        role="user",
        state="Lagos",
        local_government="Ikeja",
        national_id="NIN123",
        date_of_birth=datetime(1990, 1, 1).date(),
    )


@pytest.fixture
def admin() -> SimpleNamespace:
    """User row for an administrator."""
    return SimpleNamespace(
        id="admin-1",
        name="Vote Admin",
        email="admin@example.org",
        role="admin",
        state=None,
        local_government=None,
        national_id=None,
        date_of_birth=None,
    )


@pytest.fixture
def period_repo() -> AsyncMock:
    from repositories.period_repository import PeriodRepository

    return AsyncMock(spec=PeriodRepository)


@pytest.fixture
def vote_repo() -> AsyncMock:
    from repositories.vote_repository import VoteRepository

    return AsyncMock(spec=VoteRepository)


@pytest.fixture
def user_repo(voter: SimpleNamespace, admin: SimpleNamespace) -> AsyncMock:
    from repositories.user_repository import UserRepository

    users = {voter.id: voter, admin.id: admin}
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_id.side_effect = lambda user_id: users.get(user_id)
    return repo


@pytest.fixture
def auth_headers() -> Callable[[SimpleNamespace], dict[str, str]]:
    """Build a bearer header carrying a real signed token for a user row."""
    from core.security import create_access_token

    def _headers(user: SimpleNamespace) -> dict[str, str]:
        token = create_access_token({"sub": user.id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def app(period_repo: AsyncMock, vote_repo: AsyncMock, user_repo: AsyncMock) -> AsyncGenerator[Any, None]:
    """FastAPI application with repositories replaced by mocks."""
    from main import app as fastapi_app
    from repositories.provider import get_period_repository, get_user_repository, get_vote_repository

    fastapi_app.dependency_overrides[get_period_repository] = lambda: period_repo
    fastapi_app.dependency_overrides[get_vote_repository] = lambda: vote_repo
    fastapi_app.dependency_overrides[get_user_repository] = lambda: user_repo
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    return session
