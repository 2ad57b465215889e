"""
Tests for the table creation script.
"""

from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.unit
class TestCreateTables:
    """Test create_tables."""

    async def test_initializes_and_disposes(self) -> None:
        from scripts.create_tables import create_tables

        with (
            patch("scripts.create_tables.init_db", new=AsyncMock()) as init_db,
            patch("scripts.create_tables.close_db", new=AsyncMock()) as close_db,
        ):
            await create_tables()

        init_db.assert_awaited_once()
        close_db.assert_awaited_once()

    async def test_disposes_on_failure(self) -> None:
        from scripts.create_tables import create_tables

        with (
            patch("scripts.create_tables.init_db", new=AsyncMock(side_effect=ConnectionError("db down"))),
            patch("scripts.create_tables.close_db", new=AsyncMock()) as close_db,
        ):
            with pytest.raises(ConnectionError):
                await create_tables()

        close_db.assert_awaited_once()
