import logging
from dataclasses import asdict, dataclass

from app.controllers.integration.registry import AdapterRegistry
from app.exceptions import NotFoundError, UpstreamProviderError
from app.models.integration import IntegrationStatus
from app.repos.account import AccountRepo
from app.repos.integration import IntegrationRepo

logger = logging.getLogger(__name__)


@dataclass
class DeletionSummary:
    posts: int = 0
    comments: int = 0
    customers: int = 0
    conversations: int = 0
    messages: int = 0
    integrations: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class TeardownController:
    """Removes an integration together with everything mirrored for it."""

    def __init__(
        self, integration_repo: IntegrationRepo, account_repo: AccountRepo, adapter_registry: AdapterRegistry
    ) -> None:
        self.integration_repo = integration_repo
        self.account_repo = account_repo
        self.adapter_registry = adapter_registry

    async def remove_integration(self, identifier: str) -> DeletionSummary:
        """
        Revoke external subscriptions, then delete mirrored rows and the integration.

        External state is revoked before anything local is touched. Once the revoke went
        through the integration is committed as ``revoked``, so a retry after a later failure
        only repeats the local deletes, which are idempotent.

        Args:
            identifier: CRM-side integration id or the public id of the account

        Raises:
            NotFoundError: no integration or account matches
            UnsupportedProviderError: the stored kind has no adapter
            UpstreamProviderError: at least one external revoke failed; nothing was deleted
        """
        integration = await self.integration_repo.get_by_identifier(identifier)
        if integration is None:
            raise NotFoundError(f"Integration not found; identifier: {identifier}", action="remove_integration")

        account = await self.account_repo.get(integration.account_id)
        if account is None:
            raise NotFoundError(
                f"Account not found; integration: {integration.erxes_api_id}", action="remove_integration"
            )

        adapter = self.adapter_registry.resolve_adapter(integration.kind)

        # Committing below expires the instance, read everything needed up front.
        integration_id = integration.id
        erxes_api_id = integration.erxes_api_id
        kind = integration.kind
        page_ids = list(integration.facebook_page_ids or [])

        if integration.status is IntegrationStatus.revoked:
            logger.info(f"Integration already revoked, skipping external revoke; integration: {erxes_api_id}")
        else:
            result = await adapter.revoke_external(account, integration)
            if not result.ok:
                raise UpstreamProviderError(
                    f"Failed to revoke external subscriptions; integration: {erxes_api_id}, "
                    f"failures: {'; '.join(result.failures)}",
                    failures=result.failures,
                    kind=kind,
                    action="remove_integration",
                )
            await self.integration_repo.set_status(integration, IntegrationStatus.revoked)
            await self.integration_repo.commit()
            logger.info(f"External subscriptions revoked; integration: {erxes_api_id}, revoked: {result.revoked}")

        summary = DeletionSummary()
        conversation_ids = await adapter.conversations.get_ids_by_integration(integration_id)

        if adapter.posts is not None and adapter.comments is not None:
            summary.posts = await adapter.posts.delete_by_recipient_ids(page_ids)
            summary.comments = await adapter.comments.delete_by_recipient_ids(page_ids)

        summary.customers = await adapter.customers.delete_by_integration(integration_id)
        summary.conversations = await adapter.conversations.delete_by_integration(integration_id)
        summary.messages = await adapter.messages.delete_by_conversation_ids(conversation_ids)
        # Messages whose conversation row was already gone.
        summary.messages += await adapter.messages.delete_by_integration(integration_id)

        summary.integrations = await self.integration_repo.delete_by_id(integration_id)
        await self.integration_repo.commit()

        logger.info(f"Integration removed; integration: {erxes_api_id}, kind: {kind}, summary: {summary.to_dict()}")
        return summary
