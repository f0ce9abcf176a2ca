import logging
from datetime import datetime, timezone
from typing import Any

from app.clients.nylas import NylasClient
from app.controllers.integration.registry import AdapterRegistry, ProviderKind
from app.exceptions import InvalidDataError, NotFoundError, UnsupportedProviderError
from app.models.integration import IntegrationStatus
from app.repos.account import AccountRepo
from app.repos.integration import IntegrationRepo
from app.utils.secrets import SecretUtils

logger = logging.getLogger(__name__)


def _parse_date(value: Any) -> datetime | None:
    # Nylas reports message dates as unix timestamps.
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


class MessageSyncController:
    """Mirrors a single Nylas message into the integration's tables."""

    def __init__(
        self,
        account_repo: AccountRepo,
        integration_repo: IntegrationRepo,
        adapter_registry: AdapterRegistry,
        nylas_client: NylasClient,
    ) -> None:
        self.account_repo = account_repo
        self.integration_repo = integration_repo
        self.adapter_registry = adapter_registry
        self.nylas_client = nylas_client

    async def sync_message(self, nylas_account_id: str, message_id: str) -> Any:
        """
        Fetch a message from Nylas and store it with its customer and conversation.

        A message that is already stored is returned as is, so re-delivered deltas are no-ops.

        Args:
            nylas_account_id: Nylas account id reported in the delta
            message_id: Nylas message id

        Returns:
            The stored conversation message row, or None when the integration is pending or
            being removed
        """
        account = await self.account_repo.get_by_nylas_account_id(nylas_account_id)
        if account is None:
            raise NotFoundError(f"Account not found; nylas_account_id: {nylas_account_id}")

        integration = await self.integration_repo.get_by_account_id(account.id)
        if integration is None:
            raise NotFoundError(f"Integration not found; nylas_account_id: {nylas_account_id}")

        if not ProviderKind.parse(integration.kind).is_hosted_auth:
            raise UnsupportedProviderError(
                f"Integration is not connected through nylas; kind: {integration.kind}", kind=integration.kind
            )
        if integration.status is not IntegrationStatus.active:
            logger.info(
                f"Skipping message for inactive integration; integration: {integration.erxes_api_id}, "
                f"status: {integration.status.value}, message_id: {message_id}"
            )
            return None
        adapter = self.adapter_registry.resolve_adapter(integration.kind)

        existing = await adapter.messages.get_by_message_id(integration.id, message_id)
        if existing is not None:
            logger.info(f"Message already synced; message_id: {message_id}")
            return existing

        if not account.nylas_token:
            raise InvalidDataError(f"Account has no nylas token; account: {account.uid}")
        message = await self.nylas_client.get_message(SecretUtils.decrypt(account.nylas_token), message_id)

        senders = message.get("from") or []
        sender = senders[0] if senders else {}
        sender_email = sender.get("email")
        if not sender_email:
            raise InvalidDataError(f"Message has no sender; message_id: {message_id}")
        thread_id = message.get("thread_id") or message_id

        customer = await adapter.customers.get_or_create_by_email(
            integration.id, sender_email, first_name=sender.get("name") or None
        )
        conversation = await adapter.conversations.get_or_create_by_thread_id(
            integration.id, thread_id, customer_id=customer.id, subject=message.get("subject")
        )
        stored = await adapter.messages.create_if_absent(
            integration.id,
            message_id,
            conversation_id=conversation.id,
            customer_id=customer.id,
            thread_id=thread_id,
            subject=message.get("subject"),
            body=message.get("body"),
            snippet=message.get("snippet"),
            from_=senders,
            to=message.get("to") or [],
            cc=message.get("cc") or [],
            bcc=message.get("bcc") or [],
            reply_to=message.get("reply_to") or [],
            files=message.get("files") or [],
            labels=message.get("labels") or [],
            unread=bool(message.get("unread", True)),
            date=_parse_date(message.get("date")),
        )
        logger.info(f"Message synced; message_id: {message_id}, integration: {integration.erxes_api_id}")
        return stored
