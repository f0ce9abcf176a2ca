from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from app.container import ApplicationContainer
from app.exceptions import NotFoundError, UnsupportedProviderError
from app.models import (
    Account,
    Integration,
    IntegrationStatus,
    NylasOffice365Conversation,
    NylasOffice365ConversationMessage,
    NylasOffice365Customer,
)
from app.utils.secrets import SecretUtils
from tests.fakes import FakeDatabase

NYLAS_MESSAGE = {
    "id": "msg-1",
    "thread_id": "thread-1",
    "subject": "Quarterly numbers",
    "body": "<p>Hello</p>",
    "snippet": "Hello",
    "from": [{"name": "Ann Customer", "email": "ann@customer.com"}],
    "to": [{"name": "", "email": "owner@example.com"}],
    "cc": [],
    "bcc": [],
    "reply_to": [],
    "files": [{"id": "file-1", "filename": "numbers.pdf"}],
    "labels": [],
    "unread": True,
    "date": 1700000000,
}


@pytest.fixture
def sync(container: ApplicationContainer) -> Any:
    return container.controllers.message_sync_controller()


@pytest.fixture
def office365_integration(
    make_account: Callable[..., Account], make_integration: Callable[..., Integration]
) -> Integration:
    account = make_account(
        kind="office365", nylas_account_id="nylas-account-1", nylas_token=SecretUtils.encrypt("nylas-token")
    )
    return make_integration(account, "nylas-office365")


async def test_sync_message_stores_customer_conversation_and_message(
    sync: Any, database: FakeDatabase, nylas_client: AsyncMock, office365_integration: Integration
) -> None:
    nylas_client.get_message.return_value = NYLAS_MESSAGE

    message = await sync.sync_message("nylas-account-1", "msg-1")

    nylas_client.get_message.assert_awaited_once_with("nylas-token", "msg-1")
    [customer] = database.all(NylasOffice365Customer)
    [conversation] = database.all(NylasOffice365Conversation)
    assert customer.email == "ann@customer.com"
    assert customer.first_name == "Ann Customer"
    assert conversation.thread_id == "thread-1"
    assert conversation.integration_id == office365_integration.id
    assert message.conversation_id == conversation.id
    assert message.integration_id == office365_integration.id
    assert message.customer_id == customer.id
    assert message.from_ == NYLAS_MESSAGE["from"]
    assert message.date.timestamp() == 1700000000


async def test_sync_message_is_idempotent(
    sync: Any, database: FakeDatabase, nylas_client: AsyncMock, office365_integration: Integration
) -> None:
    nylas_client.get_message.return_value = NYLAS_MESSAGE

    first = await sync.sync_message("nylas-account-1", "msg-1")
    second = await sync.sync_message("nylas-account-1", "msg-1")

    assert first is second
    assert nylas_client.get_message.await_count == 1
    assert len(database.all(NylasOffice365ConversationMessage)) == 1


async def test_sync_message_reuses_thread_conversation(
    sync: Any, database: FakeDatabase, nylas_client: AsyncMock, office365_integration: Integration
) -> None:
    nylas_client.get_message.side_effect = [NYLAS_MESSAGE, {**NYLAS_MESSAGE, "id": "msg-2"}]

    await sync.sync_message("nylas-account-1", "msg-1")
    await sync.sync_message("nylas-account-1", "msg-2")

    assert len(database.all(NylasOffice365Conversation)) == 1
    assert len(database.all(NylasOffice365Customer)) == 1
    assert len(database.all(NylasOffice365ConversationMessage)) == 2


async def test_sync_message_unknown_account(sync: Any, nylas_client: AsyncMock) -> None:
    with pytest.raises(NotFoundError):
        await sync.sync_message("unknown-account", "msg-1")

    nylas_client.get_message.assert_not_awaited()


async def test_sync_message_rejects_non_nylas_integration(
    sync: Any, make_account: Callable[..., Account], make_integration: Callable[..., Integration]
) -> None:
    account = make_account(kind="gmail", nylas_account_id="nylas-account-1")
    make_integration(account, "gmail")

    with pytest.raises(UnsupportedProviderError):
        await sync.sync_message("nylas-account-1", "msg-1")


@pytest.mark.parametrize("status", [IntegrationStatus.pending, IntegrationStatus.revoked])
async def test_inactive_integration_is_not_synced(
    sync: Any,
    database: FakeDatabase,
    nylas_client: AsyncMock,
    office365_integration: Integration,
    status: IntegrationStatus,
) -> None:
    office365_integration.status = status
    nylas_client.get_message.return_value = NYLAS_MESSAGE

    assert await sync.sync_message("nylas-account-1", "msg-1") is None

    nylas_client.get_message.assert_not_awaited()
    assert database.all(NylasOffice365Customer) == []
    assert database.all(NylasOffice365ConversationMessage) == []
