from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.clients.base import BaseClient
from app.clients.session import HttpSessionManager
from app.exceptions import UpstreamProviderError
from app.utils.provider_config import get_client_config, get_provider_settings

GMAIL_API_URL = "https://gmail.googleapis.com/gmail/v1"


@dataclass
class GmailCredentials:
    access_token: str
    refresh_token: str | None = None
    expiry_date: datetime | None = None

    def is_expired(self) -> bool:
        # Refresh a minute early so the token does not expire mid-request.
        return self.expiry_date is not None and self.expiry_date <= datetime.now(timezone.utc) + timedelta(minutes=1)


class GmailClient(BaseClient):
    """Gmail push-notification control."""

    provider_name = "gmail"

    def __init__(self, session_manager: HttpSessionManager) -> None:
        super().__init__(session_manager)

    async def refresh_access_token(self, credentials: GmailCredentials) -> GmailCredentials:
        """Return credentials with a fresh access token when the stored one has expired."""
        if not credentials.is_expired():
            return credentials
        if not credentials.refresh_token:
            raise UpstreamProviderError("Gmail access token expired and no refresh token is stored")

        client_config = get_client_config("gmail")
        response = await self._request(
            "POST",
            get_provider_settings("gmail").token_url,
            data={
                "client_id": client_config.client_id or "",
                "client_secret": client_config.client_secret or "",
                "refresh_token": credentials.refresh_token,
                "grant_type": "refresh_token",
            },
        )
        return GmailCredentials(
            access_token=response["access_token"],
            refresh_token=credentials.refresh_token,
            expiry_date=datetime.now(timezone.utc) + timedelta(seconds=int(response.get("expires_in", 3600))),
        )

    async def stop_push_notification(self, email: str, credentials: GmailCredentials) -> None:
        """Stop Gmail from publishing mailbox changes for the user."""
        credentials = await self.refresh_access_token(credentials)
        await self._request(
            "POST",
            f"{GMAIL_API_URL}/users/{email}/stop",
            headers={"Authorization": f"Bearer {credentials.access_token}"},
        )
        self._logger.info(f"Stopped gmail push notifications; email: {email}")
