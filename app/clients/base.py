import asyncio
import logging
from typing import Any, Literal

import aiohttp

from app.clients.session import HttpSessionManager
from app.exceptions import UpstreamProviderError


class BaseClient:
    """Shared request plumbing for the Facebook, Gmail and Nylas clients."""

    provider_name = "provider"

    def __init__(self, session_manager: HttpSessionManager) -> None:
        self._session_manager = session_manager
        self._logger = logging.getLogger(self.__class__.__module__)

    async def _request(
        self,
        method: str,
        url: str,
        response_type: Literal["json", "bytes"] = "json",
        **kwargs: Any,
    ) -> Any:
        """
        Perform a request and decode the response.

        Query strings are passed through ``params`` so that tokens never end up in log lines.

        Raises:
            UpstreamProviderError: on transport errors, timeouts and non-2xx responses
        """
        session = await self._session_manager.get_session()
        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise UpstreamProviderError(
                        f"{self.provider_name} request failed; method: {method}, url: {url}, "
                        f"status: {response.status}, body: {body[:500]}",
                        upstream_status=response.status,
                    )
                if response.status == 204:
                    return None
                if response_type == "bytes":
                    return await response.read()
                return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise UpstreamProviderError(f"{self.provider_name} request timed out; method: {method}, url: {url}") from e
        except aiohttp.ClientError as e:
            raise UpstreamProviderError(
                f"{self.provider_name} request failed; method: {method}, url: {url}, error: {e}"
            ) from e
