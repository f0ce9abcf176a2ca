import asyncio
import json
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from app.clients.facebook import FacebookGraphClient
from app.clients.gmail import GMAIL_API_URL, GmailClient, GmailCredentials
from app.clients.nylas import UNCONFIGURED, NylasClient, NylasConfig, NylasCredentials
from app.clients.session import HttpSessionManager
from app.exceptions import UpstreamProviderError
from app.utils.provider_config import GOOGLE_OAUTH_ACCESS_TOKEN_URL


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, content: bytes = b"") -> None:
        self.status = status
        self._payload = payload
        self._content = content

    async def text(self) -> str:
        return json.dumps(self._payload)

    async def json(self, content_type: str | None = None) -> Any:
        return self._payload

    async def read(self) -> bytes:
        return self._content

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *args: Any) -> bool:
        return False


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.request.return_value = FakeResponse(payload={"success": True})
    return session


@pytest.fixture
def session_manager(session: MagicMock) -> AsyncMock:
    manager = AsyncMock(spec=HttpSessionManager)
    manager.get_session.return_value = session
    return manager


@pytest.fixture
def configured() -> NylasConfig:
    config = NylasConfig()
    config.configure("client-id", "client-secret")
    return config


class TestNylasConfig:
    def test_starts_unconfigured(self) -> None:
        config = NylasConfig()

        assert config.credentials() is UNCONFIGURED
        with pytest.raises(UpstreamProviderError):
            config.require()

    def test_configure_and_reset(self) -> None:
        config = NylasConfig()

        assert config.configure("client-id", "client-secret")
        assert config.credentials() == NylasCredentials(client_id="client-id", client_secret="client-secret")

        config.reset()
        assert config.credentials() is UNCONFIGURED

    @pytest.mark.parametrize("client_id,client_secret", [(None, "secret"), ("id", None), ("", "")])
    def test_missing_values_stay_unconfigured(self, client_id: str | None, client_secret: str | None) -> None:
        config = NylasConfig()

        assert not config.configure(client_id, client_secret)
        assert config.credentials() is UNCONFIGURED


class TestRequestErrors:
    async def test_error_status_raises_with_upstream_status(self, session: MagicMock, session_manager: Any) -> None:
        session.request.return_value = FakeResponse(status=404, payload={"error": "missing"})
        client = FacebookGraphClient(session_manager)

        with pytest.raises(UpstreamProviderError) as exc_info:
            await client.unsubscribe_page("pg1", "page-token")

        assert exc_info.value.upstream_status == 404

    @pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()])
    async def test_transport_errors_are_upstream_errors(
        self, error: Exception, session: MagicMock, session_manager: Any
    ) -> None:
        session.request.side_effect = error
        client = FacebookGraphClient(session_manager)

        with pytest.raises(UpstreamProviderError) as exc_info:
            await client.unsubscribe_page("pg1", "page-token")

        assert exc_info.value.upstream_status is None


class TestFacebookGraphClient:
    async def test_page_token_and_unsubscribe(self, session: MagicMock, session_manager: Any) -> None:
        session.request.side_effect = [
            FakeResponse(payload={"id": "pg1", "access_token": "page-token"}),
            FakeResponse(payload={"success": True}),
        ]
        client = FacebookGraphClient(session_manager)

        page_token = await client.get_page_access_token("pg1", "user-token")
        unsubscribed = await client.unsubscribe_page("pg1", page_token)

        assert page_token == "page-token"
        assert unsubscribed
        first, second = session.request.call_args_list
        assert first.args == ("GET", "https://graph.facebook.com/v18.0/pg1")
        assert first.kwargs["params"] == {"fields": "access_token", "access_token": "user-token"}
        assert second.args == ("DELETE", "https://graph.facebook.com/v18.0/pg1/subscribed_apps")
        assert second.kwargs["params"] == {"access_token": "page-token"}

    async def test_missing_page_token(self, session: MagicMock, session_manager: Any) -> None:
        session.request.return_value = FakeResponse(payload={"id": "pg1"})
        client = FacebookGraphClient(session_manager)

        with pytest.raises(UpstreamProviderError):
            await client.get_page_access_token("pg1", "user-token")


class TestGmailClient:
    async def test_stop_with_valid_token(self, session: MagicMock, session_manager: Any) -> None:
        session.request.return_value = FakeResponse(status=204)
        credentials = GmailCredentials(
            access_token="access", refresh_token="refresh", expiry_date=datetime.now(timezone.utc) + timedelta(hours=1)
        )

        await GmailClient(session_manager).stop_push_notification("owner@example.com", credentials)

        session.request.assert_called_once()
        method, url = session.request.call_args.args
        assert (method, url) == ("POST", f"{GMAIL_API_URL}/users/owner@example.com/stop")
        assert session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer access"}

    async def test_expired_token_is_refreshed_first(self, session: MagicMock, session_manager: Any) -> None:
        session.request.side_effect = [
            FakeResponse(payload={"access_token": "fresh", "expires_in": 3600}),
            FakeResponse(status=204),
        ]
        credentials = GmailCredentials(
            access_token="stale", refresh_token="refresh", expiry_date=datetime.now(timezone.utc) - timedelta(hours=1)
        )

        await GmailClient(session_manager).stop_push_notification("owner@example.com", credentials)

        refresh, stop = session.request.call_args_list
        assert refresh.args == ("POST", GOOGLE_OAUTH_ACCESS_TOKEN_URL)
        assert refresh.kwargs["data"]["refresh_token"] == "refresh"
        assert refresh.kwargs["data"]["client_id"] == "google-client-id"
        assert stop.kwargs["headers"] == {"Authorization": "Bearer fresh"}

    async def test_expired_without_refresh_token(self, session_manager: Any) -> None:
        credentials = GmailCredentials(access_token="stale", expiry_date=datetime.now(timezone.utc) - timedelta(1))

        with pytest.raises(UpstreamProviderError):
            await GmailClient(session_manager).refresh_access_token(credentials)


class TestNylasClient:
    async def test_connect_account(self, session: MagicMock, session_manager: Any, configured: NylasConfig) -> None:
        session.request.side_effect = [
            FakeResponse(payload={"code": "auth-code"}),
            FakeResponse(payload={"access_token": "nylas-token", "account_id": "nylas-1"}),
        ]
        client = NylasClient(session_manager, configured)

        connection = await client.connect_account("gmail", "owner@example.com", None, {"k": "v"}, "email.send")

        assert (connection.access_token, connection.account_id) == ("nylas-token", "nylas-1")
        authorize, token = session.request.call_args_list
        assert authorize.args == ("POST", "https://api.nylas.com/connect/authorize")
        assert authorize.kwargs["json"]["client_id"] == "client-id"
        assert authorize.kwargs["json"]["name"] == "owner@example.com"
        assert authorize.kwargs["json"]["settings"] == {"k": "v"}
        assert token.kwargs["json"] == {"client_id": "client-id", "client_secret": "client-secret", "code": "auth-code"}

    @pytest.mark.parametrize("enable,action", [(True, "upgrade"), (False, "downgrade")])
    async def test_enable_or_disable_account(
        self, enable: bool, action: str, session: MagicMock, session_manager: Any, configured: NylasConfig
    ) -> None:
        await NylasClient(session_manager, configured).enable_or_disable_account("nylas-1", enable=enable)

        method, url = session.request.call_args.args
        assert (method, url) == ("POST", f"https://api.nylas.com/a/client-id/accounts/nylas-1/{action}")
        assert session.request.call_args.kwargs["auth"] == aiohttp.BasicAuth("client-secret", "")

    async def test_requires_configuration(self, session: MagicMock, session_manager: Any) -> None:
        with pytest.raises(UpstreamProviderError):
            await NylasClient(session_manager, NylasConfig()).enable_or_disable_account("nylas-1", enable=False)

        session.request.assert_not_called()

    async def test_get_attachment_returns_bytes(
        self, session: MagicMock, session_manager: Any, configured: NylasConfig
    ) -> None:
        session.request.return_value = FakeResponse(content=b"%PDF")

        content = await NylasClient(session_manager, configured).get_attachment("nylas-token", "file-1")

        assert content == b"%PDF"
        assert session.request.call_args.args == ("GET", "https://api.nylas.com/files/file-1/download")
