"""
Tests for voter eligibility checks.
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from services.eligibility import Eligibility, calc_age_on, check_eligibility


def _user(**overrides) -> SimpleNamespace:
    data = {
        "id": "user-1",
        "email": "person@example.com",
        "national_id": "ABC123",
        "date_of_birth": "1990-01-01",
        "state": "Lagos",
        "local_government": "Ikeja",
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def _period(**overrides) -> SimpleNamespace:
    data = {
        "min_age": 18,
        "start_time": "2025-01-01",
        "scope": "national",
        "scope_state": None,
        "scope_lga": None,
        "require_whitelist": False,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def whitelist() -> AsyncMock:
    return AsyncMock(return_value=False)


@pytest.mark.unit
class TestCalcAge:
    """Tests for age calculation."""

    def test_full_years(self):
        assert calc_age_on("2000-05-15", "2025-05-16T00:00:00Z") == 25
        assert calc_age_on("2000-12-31", "2025-01-01") == 24

    def test_birthday_counts(self):
        assert calc_age_on(date(2000, 5, 15), date(2025, 5, 15)) == 25

    def test_accepts_datetimes(self):
        assert calc_age_on(date(2000, 1, 1), datetime(2020, 6, 1, tzinfo=timezone.utc)) == 20

    def test_unknown_birth_date(self):
        assert calc_age_on(None, "2025-01-01") is None
        assert calc_age_on("not a date", "2025-01-01") is None


@pytest.mark.unit
class TestCheckEligibility:
    """Tests for period restrictions."""

    async def test_no_period(self, whitelist):
        assert await check_eligibility(_user(), None, whitelist) == Eligibility(False, "No active period")

    async def test_rejects_users_below_minimum_age(self, whitelist):
        result = await check_eligibility(_user(date_of_birth="2010-01-01"), _period(), whitelist)

        assert result == Eligibility(False, "Minimum age 18")

    async def test_requires_date_of_birth_for_age_limit(self, whitelist):
        result = await check_eligibility(_user(date_of_birth=None), _period(), whitelist)

        assert result == Eligibility(False, "Missing date of birth")

    async def test_no_age_limit_skips_birth_date(self, whitelist):
        result = await check_eligibility(_user(date_of_birth=None), _period(min_age=None), whitelist)

        assert result.eligible is True

    async def test_enforces_local_scope_by_state(self, whitelist):
        period = _period(scope="local", scope_state="Oyo", scope_lga="Ibadan")

        result = await check_eligibility(_user(), period, whitelist)

        assert result == Eligibility(False, "Restricted to Oyo")

    async def test_enforces_local_scope_by_lga(self, whitelist):
        period = _period(scope="local", scope_state="lagos", scope_lga="Epe")

        result = await check_eligibility(_user(), period, whitelist)

        assert result == Eligibility(False, "Restricted to Epe")

    async def test_local_scope_matches_case_insensitively(self, whitelist):
        period = _period(scope="local", scope_state=" LAGOS", scope_lga="ikeja ")

        assert (await check_eligibility(_user(), period, whitelist)).eligible is True

    async def test_state_scope_needs_user_state(self, whitelist):
        result = await check_eligibility(_user(state=None), _period(scope="state", scope_state="Lagos"), whitelist)

        assert result == Eligibility(False, "State restriction")

    async def test_local_scope_needs_user_lga(self, whitelist):
        period = _period(scope="local", scope_state="Lagos", scope_lga="Ikeja")

        result = await check_eligibility(_user(local_government=""), period, whitelist)

        assert result == Eligibility(False, "LGA restriction")

    async def test_legacy_lga_restriction(self, whitelist):
        result = await check_eligibility(_user(local_government=None), _period(scope_lga="Ikeja"), whitelist)

        assert result == Eligibility(False, "Residence LGA not set")

    async def test_requires_whitelist_entry_when_flagged(self, whitelist):
        period = _period(require_whitelist=True)

        denied = await check_eligibility(_user(), period, whitelist)
        whitelist.return_value = True
        allowed = await check_eligibility(_user(), period, whitelist)

        assert denied == Eligibility(False, "Not on whitelist")
        assert allowed == Eligibility(True)
        whitelist.assert_awaited_with("person@example.com", "ABC123")

    async def test_whitelist_not_consulted_when_not_required(self, whitelist):
        result = await check_eligibility(_user(), _period(), whitelist)

        assert result.eligible is True
        whitelist.assert_not_awaited()
