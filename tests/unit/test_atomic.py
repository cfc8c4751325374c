"""Unit tests for the atomic() transaction block."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.tracker.core.db import atomic, in_atomic_block

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_session() -> MagicMock:
    """Create mock database session with a real info dict."""
    session = MagicMock()
    session.info = {}
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestAtomic:
    async def test_commits_on_success(self, mock_session):
        async with atomic(mock_session):
            assert in_atomic_block(mock_session)

        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_awaited()
        assert not in_atomic_block(mock_session)

    async def test_rolls_back_and_reraises(self, mock_session):
        with pytest.raises(RuntimeError, match="boom"):
            async with atomic(mock_session):
                raise RuntimeError("boom")

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
        assert not in_atomic_block(mock_session)

    async def test_nested_block_joins_outer(self, mock_session):
        async with atomic(mock_session):
            async with atomic(mock_session):
                pass
            mock_session.commit.assert_not_awaited()

        mock_session.commit.assert_awaited_once()

    async def test_error_in_nested_block_rolls_back_once(self, mock_session):
        with pytest.raises(ValueError):
            async with atomic(mock_session):
                async with atomic(mock_session):
                    raise ValueError("inner")

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()

    async def test_failed_commit_rolls_back(self, mock_session):
        mock_session.commit.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            async with atomic(mock_session):
                pass

        mock_session.rollback.assert_awaited_once()
