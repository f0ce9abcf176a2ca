import logging
from uuid import UUID

from app.clients.nylas import NylasClient
from app.controllers.integration.registry import ProviderKind
from app.exceptions import EntityAlreadyExistError, NotFoundError, UpstreamProviderError
from app.models.account import Account
from app.models.integration import Integration, IntegrationStatus
from app.repos.account import AccountRepo
from app.repos.integration import IntegrationRepo
from app.utils.provider_config import get_client_config, get_provider_config
from app.utils.secrets import SecretUtils

logger = logging.getLogger(__name__)

NYLAS_SCOPES = "email.read_only,email.send,email.modify"


class IntegrationController:
    """Creates integrations and connects hosted-auth accounts to Nylas."""

    def __init__(self, account_repo: AccountRepo, integration_repo: IntegrationRepo, nylas_client: NylasClient) -> None:
        self.account_repo = account_repo
        self.integration_repo = integration_repo
        self.nylas_client = nylas_client

    async def _get_account(self, account_id: str) -> Account:
        try:
            account_uuid = UUID(account_id)
        except ValueError:
            raise NotFoundError(f"Account not found; account_id: {account_id}") from None

        account = await self.account_repo.get_by_uuid(account_uuid)
        if account is None:
            raise NotFoundError(f"Account not found; account_id: {account_id}")
        return account

    async def create_integration(
        self, account_id: str, erxes_api_id: str, kind: str, facebook_page_ids: list[str] | None = None
    ) -> Integration:
        """
        Create an integration for an existing account.

        The row is inserted as ``pending``; hosted-auth kinds are then connected to Nylas and
        the row becomes ``active``. When the connect call fails the pending row is removed again.
        """
        provider_kind = ProviderKind.parse(kind)
        account = await self._get_account(account_id)

        if await self.integration_repo.get_by_erxes_api_id(erxes_api_id) is not None:
            raise EntityAlreadyExistError(f"Integration already exists; integration: {erxes_api_id}")

        integration = Integration(
            erxes_api_id=erxes_api_id,
            account_id=account.id,
            kind=kind,
            email=account.email,
            facebook_page_ids=facebook_page_ids or [],
            status=IntegrationStatus.pending,
        )
        await self.integration_repo.add(integration)
        logger.info(f"Integration created; integration: {erxes_api_id}, kind: {kind}")

        if provider_kind.is_hosted_auth:
            try:
                await self._connect_to_nylas(account, provider_kind)
            except UpstreamProviderError:
                logger.warning(f"Connecting to nylas failed, removing pending integration; integration: {erxes_api_id}")
                await self.integration_repo.delete(integration)
                await self.integration_repo.commit()
                raise

        return await self.integration_repo.set_status(integration, IntegrationStatus.active)

    async def _connect_to_nylas(self, account: Account, provider_kind: ProviderKind) -> None:
        """Connect the account through Nylas hosted auth and keep the issued token."""
        kind = provider_kind.adapter_key
        client_config = get_client_config(kind)
        provider_config = get_provider_config(
            kind,
            client_config.client_id or "",
            client_config.client_secret or "",
            SecretUtils.decrypt_optional(account.token_secret) or "",
        )

        connection = await self.nylas_client.connect_account(
            provider=provider_kind.provider,
            email=account.email or account.uid,
            name=account.name,
            provider_settings=provider_config,
            scopes=NYLAS_SCOPES,
        )
        await self.account_repo.update(
            account,
            {"nylas_token": SecretUtils.encrypt(connection.access_token), "nylas_account_id": connection.account_id},
        )
        logger.info(f"Connected account to nylas; account: {account.uid}, provider: {provider_kind.provider}")
