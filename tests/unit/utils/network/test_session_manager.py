"""
Unit tests for the shared aiohttp session manager.
"""

import pytest

from govuk.core.config import API
from govuk.utils.network import session_manager
from govuk.utils.network.session_manager import SharedSessionManager


class TestSharedSessionManager:
    """Tests for session reuse and cleanup."""

    @pytest.mark.asyncio
    async def test_session_is_created_once_and_reused(self):
        manager = SharedSessionManager(timeout=5)
        try:
            first = await manager.get_session()
            second = await manager.get_session()

            assert first is second
            assert first.headers["User-Agent"] == API["USER_AGENT"]
            assert first.headers["Accept"] == "application/json"
            assert first.timeout.total == 5

            stats = manager.get_connection_stats()
            assert stats["total_requests"] == 2
            assert stats["session_recreations"] == 1
            assert stats["session_closed"] is False
        finally:
            await manager.close()

    @pytest.mark.asyncio
    async def test_closed_session_is_recreated(self):
        manager = SharedSessionManager()
        try:
            first = await manager.get_session()
            await first.close()
            second = await manager.get_session()

            assert second is not first
            assert not second.closed
            assert manager.get_connection_stats()["session_recreations"] == 2
        finally:
            await manager.close()

    @pytest.mark.asyncio
    async def test_close(self):
        manager = SharedSessionManager()
        session = await manager.get_session()
        await manager.close()

        assert session.closed
        assert manager.get_connection_stats()["session_closed"] is True


@pytest.mark.asyncio
async def test_shared_session_singleton():
    try:
        first = await session_manager.get_shared_session()
        assert await session_manager.get_shared_session() is first
        assert session_manager.get_session_manager() is session_manager.get_session_manager()
    finally:
        await session_manager.close_shared_session()

    assert session_manager._session_manager is None
