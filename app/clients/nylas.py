"""
Nylas hosted-auth and messaging API client.

The Nylas application credentials are process-wide state: ``nylas_config`` is configured
once during application startup and reset on shutdown. Until then ``credentials()``
returns the ``UNCONFIGURED`` sentinel.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import aiohttp

from app.clients.base import BaseClient
from app.clients.session import HttpSessionManager
from app.exceptions import UpstreamProviderError
from settings import settings

logger = logging.getLogger(__name__)


class _Unconfigured:
    def __repr__(self) -> str:
        return "UNCONFIGURED"


UNCONFIGURED: Final = _Unconfigured()


@dataclass(frozen=True)
class NylasCredentials:
    client_id: str
    client_secret: str


class NylasConfig:
    """Lifecycle holder for the Nylas application credentials."""

    _credentials: NylasCredentials | _Unconfigured

    def __init__(self) -> None:
        self._credentials = UNCONFIGURED

    def configure(self, client_id: str | None, client_secret: str | None) -> bool:
        """Install application credentials. Missing values leave the config unconfigured."""
        if not client_id or not client_secret:
            logger.warning("Nylas is not configured; NYLAS_CLIENT_ID or NYLAS_CLIENT_SECRET is missing")
            self._credentials = UNCONFIGURED
            return False

        self._credentials = NylasCredentials(client_id=client_id, client_secret=client_secret)
        logger.info("Nylas configured")
        return True

    def reset(self) -> None:
        self._credentials = UNCONFIGURED

    def credentials(self) -> NylasCredentials | _Unconfigured:
        return self._credentials

    def require(self) -> NylasCredentials:
        """Return the credentials or fail when the process was started without them."""
        credentials = self._credentials
        if isinstance(credentials, _Unconfigured):
            raise UpstreamProviderError("Nylas is not configured")
        return credentials


# Global Nylas configuration instance
nylas_config = NylasConfig()


@dataclass
class NylasConnection:
    access_token: str
    account_id: str


class NylasClient(BaseClient):
    """Calls against the Nylas REST API."""

    provider_name = "nylas"

    def __init__(self, session_manager: HttpSessionManager, config: NylasConfig) -> None:
        super().__init__(session_manager)
        self._config = config
        self._api_url = settings.nylas.api_url

    def _bearer(self, access_token: str) -> dict[str, str]:
        if not access_token:
            raise UpstreamProviderError("Nylas access token not found")
        return {"Authorization": f"Bearer {access_token}"}

    async def connect_account(
        self, provider: str, email: str, name: str | None, provider_settings: dict[str, Any], scopes: str
    ) -> NylasConnection:
        """Connect a mailbox through hosted auth: authorize, then exchange the code for a token."""
        credentials = self._config.require()

        authorize = await self._request(
            "POST",
            f"{self._api_url}/connect/authorize",
            json={
                "client_id": credentials.client_id,
                "name": name or email,
                "email_address": email,
                "provider": provider,
                "settings": provider_settings,
                "scopes": scopes,
            },
        )
        token = await self._request(
            "POST",
            f"{self._api_url}/connect/token",
            json={
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                "code": authorize["code"],
            },
        )
        self._logger.info(f"Connected account to nylas; provider: {provider}, email: {email}")
        return NylasConnection(access_token=token["access_token"], account_id=token["account_id"])

    async def enable_or_disable_account(self, account_id: str, enable: bool) -> None:
        """Upgrade (enable) or downgrade (disable) a hosted-auth account."""
        credentials = self._config.require()
        action = "upgrade" if enable else "downgrade"
        await self._request(
            "POST",
            f"{self._api_url}/a/{credentials.client_id}/accounts/{account_id}/{action}",
            auth=aiohttp.BasicAuth(credentials.client_secret, ""),
        )
        self._logger.info(f"Nylas account {action}d; account_id: {account_id}")

    async def get_message(self, access_token: str, message_id: str) -> dict[str, Any]:
        result: dict[str, Any] = await self._request(
            "GET", f"{self._api_url}/messages/{message_id}", headers=self._bearer(access_token)
        )
        return result

    async def upload_file(self, access_token: str, name: str, path: str, content_type: str) -> dict[str, Any]:
        """Upload a local file and return the Nylas file descriptor."""
        content = await asyncio.to_thread(Path(path).read_bytes)
        form = aiohttp.FormData()
        form.add_field("file", content, filename=name, content_type=content_type)

        result = await self._request("POST", f"{self._api_url}/files", data=form, headers=self._bearer(access_token))
        # Nylas answers with a list holding the single uploaded file.
        if isinstance(result, list):
            return result[0] if result else {}
        return result or {}

    async def get_attachment(self, access_token: str, attachment_id: str) -> bytes:
        data: bytes = await self._request(
            "GET",
            f"{self._api_url}/files/{attachment_id}/download",
            response_type="bytes",
            headers=self._bearer(access_token),
        )
        return data

    async def send_message(self, access_token: str, draft: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = await self._request(
            "POST", f"{self._api_url}/send", json=draft, headers=self._bearer(access_token)
        )
        self._logger.info(f"Nylas message sent; message_id: {result.get('id') if result else None}")
        return result
