import json
import logging
from typing import Any

from app.clients.nylas import NylasClient
from app.controllers.integration.registry import AdapterRegistry, ProviderKind
from app.exceptions import InvalidDataError, NotFoundError, UnsupportedProviderError
from app.models.account import Account
from app.models.integration import Integration
from app.repos.account import AccountRepo
from app.repos.integration import IntegrationRepo
from app.utils.message_utils import MessageUtils
from app.utils.secrets import SecretUtils

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("to", "cc", "bcc", "subject", "replyToMessageId")


class NylasController:
    """Message read/upload/send operations on behalf of an integration."""

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

    async def _get_integration_account(self, erxes_api_id: str) -> tuple[Integration, Account]:
        integration = await self.integration_repo.get_by_erxes_api_id(erxes_api_id)
        if integration is None:
            raise NotFoundError(f"Integration not found; integration: {erxes_api_id}")

        account = await self.account_repo.get(integration.account_id)
        if account is None:
            raise NotFoundError(f"Account not found; integration: {erxes_api_id}")
        return integration, account

    def _access_token(self, account: Account) -> str:
        if not account.nylas_token:
            raise InvalidDataError(f"Account is not connected to nylas; account: {account.uid}")
        return SecretUtils.decrypt(account.nylas_token)

    async def get_message(self, erxes_api_message_id: str | None, integration_id: str) -> dict[str, Any]:
        """Stored message plus the account email, so callers can tell which side sent it."""
        if not erxes_api_message_id:
            raise InvalidDataError("erxesApiMessageId is not provided")

        integration, account = await self._get_integration_account(integration_id)
        if not ProviderKind.parse(integration.kind).is_hosted_auth:
            raise UnsupportedProviderError(
                f"Integration is not connected through nylas; kind: {integration.kind}", kind=integration.kind
            )
        adapter = self.adapter_registry.resolve_adapter(integration.kind)

        message = await adapter.messages.get_by_erxes_api_message_id(integration.id, erxes_api_message_id)
        if message is None:
            raise NotFoundError(f"Conversation message not found; erxes_api_message_id: {erxes_api_message_id}")

        data: dict[str, Any] = message.to_dict()
        data["integration_email"] = account.email
        return data

    async def upload(self, name: str, path: str, content_type: str, erxes_api_id: str) -> dict[str, Any]:
        _, account = await self._get_integration_account(erxes_api_id)
        file = await self.nylas_client.upload_file(self._access_token(account), name, path, content_type)
        logger.info(f"File uploaded to nylas; integration: {erxes_api_id}, name: {name}")
        return file

    async def get_attachment(self, attachment_id: str, integration_id: str) -> bytes:
        _, account = await self._get_integration_account(integration_id)
        return await self.nylas_client.get_attachment(self._access_token(account), attachment_id)

    async def send(self, data: str, erxes_api_id: str) -> dict[str, Any]:
        """
        Send a message described by the JSON encoded ``data``.

        Recipient fields are comma separated address strings; ``attachments`` holds previously
        uploaded Nylas file descriptors.
        """
        try:
            params: Any = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidDataError(f"Invalid message data; error: {e}") from e
        if not isinstance(params, dict):
            raise InvalidDataError(f"Message data must be a JSON object; got: {type(params).__name__}")
        for key in TEXT_FIELDS:
            if not isinstance(params.get(key), str | None):
                raise InvalidDataError(f"Message field must be a string; field: {key}")

        _, account = await self._get_integration_account(erxes_api_id)

        reply_to_message_id = params.pop("replyToMessageId", None)
        params.pop("from", None)
        draft: dict[str, Any] = {
            "to": MessageUtils.build_email_address(params.pop("to", None)),
            "cc": MessageUtils.build_email_address(params.pop("cc", None)),
            "bcc": MessageUtils.build_email_address(params.pop("bcc", None)),
            "subject": MessageUtils.build_subject(params.pop("subject", None), reply_to_message_id),
            "files": params.pop("attachments", None),
            "reply_to_message_id": reply_to_message_id,
            **params,
        }
        draft = {key: value for key, value in draft.items() if value is not None}

        await self.nylas_client.send_message(self._access_token(account), draft)
        logger.info(f"Message sent; integration: {erxes_api_id}")
        return {"status": "ok"}
