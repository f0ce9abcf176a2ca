from typing import Any

from app.clients.base import BaseClient
from app.clients.session import HttpSessionManager
from app.exceptions import UpstreamProviderError
from settings import settings


class FacebookGraphClient(BaseClient):
    """Facebook Graph API calls needed to manage page subscriptions."""

    provider_name = "facebook"

    def __init__(self, session_manager: HttpSessionManager) -> None:
        super().__init__(session_manager)
        self._base_url = f"{settings.facebook.graph_url}/{settings.facebook.api_version}"

    async def get_page_access_token(self, page_id: str, user_access_token: str) -> str:
        """Exchange the account's user token for the page token."""
        response: dict[str, Any] = await self._request(
            "GET",
            f"{self._base_url}/{page_id}",
            params={"fields": "access_token", "access_token": user_access_token},
        )
        page_token = response.get("access_token") if response else None
        if not page_token:
            raise UpstreamProviderError(f"Facebook returned no page access token; page_id: {page_id}")
        return str(page_token)

    async def unsubscribe_page(self, page_id: str, page_access_token: str) -> bool:
        """Remove the app's webhook subscription from the page."""
        response = await self._request(
            "DELETE",
            f"{self._base_url}/{page_id}/subscribed_apps",
            params={"access_token": page_access_token},
        )
        self._logger.info(f"Unsubscribed facebook page; page_id: {page_id}")
        return bool(response.get("success", True)) if isinstance(response, dict) else True
