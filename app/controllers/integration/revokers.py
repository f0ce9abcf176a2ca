"""
External subscription revoke routines, one per provider family.

Each revoker attempts every resource it owns and reports failures in the returned
``RevokeResult`` instead of raising. A resource the provider no longer knows (HTTP 404)
counts as revoked so that a retried teardown can get past this step.
"""

import logging
from http import HTTPStatus

from app.clients.facebook import FacebookGraphClient
from app.clients.gmail import GmailClient, GmailCredentials
from app.clients.nylas import NylasClient
from app.controllers.integration.registry import RevokeResult
from app.exceptions import UpstreamProviderError
from app.models.account import Account
from app.models.integration import Integration
from app.utils.secrets import SecretUtils

logger = logging.getLogger(__name__)


def _is_already_revoked(error: UpstreamProviderError) -> bool:
    return error.upstream_status == HTTPStatus.NOT_FOUND


class FacebookRevoker:
    def __init__(self, graph_client: FacebookGraphClient) -> None:
        self.graph_client = graph_client

    async def revoke(self, account: Account, integration: Integration) -> RevokeResult:
        """Unsubscribe the app from every page listed on the integration."""
        result = RevokeResult()
        user_token = SecretUtils.decrypt(account.token)

        for page_id in integration.facebook_page_ids or []:
            resource = f"facebook page {page_id}"
            try:
                page_token = await self.graph_client.get_page_access_token(page_id, user_token)
                if not await self.graph_client.unsubscribe_page(page_id, page_token):
                    logger.warning(f"Facebook refused to unsubscribe page; page_id: {page_id}")
                    result.failures.append(f"{resource}: unsubscribe was not confirmed")
                    continue
                result.revoked.append(resource)
            except UpstreamProviderError as e:
                if _is_already_revoked(e):
                    logger.info(f"Facebook page already unsubscribed; page_id: {page_id}")
                    result.revoked.append(resource)
                else:
                    logger.warning(f"Failed to unsubscribe facebook page; page_id: {page_id}, error: {e}")
                    result.failures.append(f"{resource}: {e.message}")

        return result


class GmailPushRevoker:
    def __init__(self, gmail_client: GmailClient) -> None:
        self.gmail_client = gmail_client

    async def revoke(self, account: Account, integration: Integration) -> RevokeResult:
        """Stop Gmail push notifications for the account mailbox."""
        result = RevokeResult()
        email = account.email or account.uid
        resource = f"gmail push {email}"
        credentials = GmailCredentials(
            access_token=SecretUtils.decrypt(account.token),
            refresh_token=SecretUtils.decrypt_optional(account.token_secret),
            expiry_date=account.expire_date,
        )

        try:
            await self.gmail_client.stop_push_notification(email, credentials)
            result.revoked.append(resource)
        except UpstreamProviderError as e:
            if _is_already_revoked(e):
                result.revoked.append(resource)
            else:
                logger.warning(f"Failed to stop gmail push notifications; email: {email}, error: {e}")
                result.failures.append(f"{resource}: {e.message}")

        return result


class NylasRevoker:
    def __init__(self, nylas_client: NylasClient) -> None:
        self.nylas_client = nylas_client

    async def revoke(self, account: Account, integration: Integration) -> RevokeResult:
        """Downgrade the hosted-auth account so Nylas stops syncing it."""
        result = RevokeResult()
        if not account.nylas_account_id:
            logger.info(f"Account was never connected to nylas; account: {account.uid}")
            return result

        resource = f"nylas account {account.nylas_account_id}"
        try:
            await self.nylas_client.enable_or_disable_account(account.nylas_account_id, enable=False)
            result.revoked.append(resource)
        except UpstreamProviderError as e:
            if _is_already_revoked(e):
                result.revoked.append(resource)
            else:
                logger.warning(f"Failed to downgrade nylas account; {resource}, error: {e}")
                result.failures.append(f"{resource}: {e.message}")

        return result


class NoopRevoker:
    """Providers without external subscription state."""

    async def revoke(self, account: Account, integration: Integration) -> RevokeResult:
        return RevokeResult()
