"""
Shared HTTP session for GOV.UK API requests.

This module provides a session manager that keeps one aiohttp session
alive for all clients, so connections to www.gov.uk are pooled and reused.
"""

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp

from ...core.config import API
from ...core.errors import NetworkError
from ...core.logging import get_logger


logger = get_logger(__name__)


class SharedSessionManager:
    """
    Owner of the shared aiohttp session.

    The session is created lazily on first use and recreated if it has been
    closed or its event loop has gone away.
    """

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_created_at: Optional[float] = None
        self._timeout = timeout or API["TIMEOUT"]
        self._user_agent = user_agent or API["USER_AGENT"]
        self._stats = {"total_requests": 0, "session_recreations": 0}

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create the shared HTTP session.

        Returns:
            aiohttp.ClientSession for the running event loop

        Raises:
            NetworkError: If session creation fails
        """
        if self._needs_new_session():
            await self._create_new_session()

        self._stats["total_requests"] += 1
        return self._session

    def _needs_new_session(self) -> bool:
        if self._session is None:
            return True

        if self._session.closed:
            logger.warning("Session was closed, creating new session")
            return True

        if self._session_loop is not asyncio.get_running_loop():
            logger.debug("Event loop changed, creating new session")
            return True

        return False

    async def _create_new_session(self) -> None:
        """Create a new HTTP session."""
        try:
            if (
                self._session is not None
                and not self._session.closed
                and self._session_loop is asyncio.get_running_loop()
            ):
                await self._session.close()
                logger.debug("Closed previous session")

            timeout = aiohttp.ClientTimeout(total=self._timeout, connect=10)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/json",
                },
                raise_for_status=False,  # Status codes are classified by the executor
            )
            self._session_loop = asyncio.get_running_loop()
            self._session_created_at = time.time()
            self._stats["session_recreations"] += 1

            logger.info(f"Created new HTTP session (timeout={self._timeout}s)")

        except Exception as e:
            logger.error(f"Failed to create HTTP session: {str(e)}")
            raise NetworkError(f"Session creation failed: {str(e)}") from e

    def get_connection_stats(self) -> Dict[str, Any]:
        """
        Get session statistics.

        Returns:
            Dict containing request and session counters
        """
        stats: Dict[str, Any] = dict(self._stats)
        stats["session_closed"] = self._session is None or self._session.closed
        if self._session_created_at and not stats["session_closed"]:
            stats["session_age_seconds"] = time.time() - self._session_created_at
        return stats

    async def close(self) -> None:
        """Close the shared session and cleanup resources."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("Closed shared HTTP session")

        self._session = None
        self._session_loop = None
        self._session_created_at = None


# Singleton instance for global access
_session_manager: Optional[SharedSessionManager] = None


def get_session_manager() -> SharedSessionManager:
    """
    Get the global shared session manager instance.

    Returns:
        SharedSessionManager: Singleton session manager instance
    """
    global _session_manager
    if _session_manager is None:
        _session_manager = SharedSessionManager()
    return _session_manager


async def get_shared_session() -> aiohttp.ClientSession:
    """
    Get the shared HTTP session.

    Returns:
        aiohttp.ClientSession: Shared session for GOV.UK API requests
    """
    return await get_session_manager().get_session()


async def close_shared_session() -> None:
    """Close the shared session and cleanup resources."""
    global _session_manager
    if _session_manager:
        await _session_manager.close()
        _session_manager = None
