import asyncio
import logging

import aiohttp

from settings import settings

logger = logging.getLogger(__name__)


class HttpSessionManager:
    """Owns the aiohttp session shared by every provider client."""

    _session: aiohttp.ClientSession | None

    def __init__(self) -> None:
        self._session = None
        self._lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        """Return the shared session, creating it on first use."""
        async with self._lock:
            if self._session is None or self._session.closed:
                timeout = aiohttp.ClientTimeout(total=settings.external_call_timeout)
                self._session = aiohttp.ClientSession(timeout=timeout)
                logger.info("HTTP session for provider clients initialized")
            return self._session

    async def close(self) -> None:
        """Close the shared session."""
        if self._session:
            await self._session.close()
            self._session = None
            logger.info("HTTP session for provider clients closed")


# Global session manager instance
http_session_manager = HttpSessionManager()
