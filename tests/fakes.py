"""
In-memory stand-ins for the repositories.

Rows are real (transient) model instances kept in a ``FakeDatabase``; the fakes implement
the repository methods the controllers call with the same semantics as the SQL versions.
"""

import itertools
from collections import defaultdict
from typing import Any, Callable, Iterable, Sequence
from uuid import UUID

from app.models import (
    Account,
    CallProConversation,
    CallProConversationMessage,
    CallProCustomer,
    FacebookComment,
    FacebookConversation,
    FacebookConversationMessage,
    FacebookCustomer,
    FacebookPost,
    GmailConversation,
    GmailConversationMessage,
    GmailCustomer,
    Integration,
    IntegrationStatus,
    NylasGmailConversation,
    NylasGmailConversationMessage,
    NylasGmailCustomer,
    NylasOffice365Conversation,
    NylasOffice365ConversationMessage,
    NylasOffice365Customer,
)

MIRROR_MODELS: dict[str, tuple[type, type, type]] = {
    "facebook": (FacebookCustomer, FacebookConversation, FacebookConversationMessage),
    "gmail": (GmailCustomer, GmailConversation, GmailConversationMessage),
    "nylas_gmail": (NylasGmailCustomer, NylasGmailConversation, NylasGmailConversationMessage),
    "nylas_office365": (NylasOffice365Customer, NylasOffice365Conversation, NylasOffice365ConversationMessage),
    "callpro": (CallProCustomer, CallProConversation, CallProConversationMessage),
}


class FakeDatabase:
    def __init__(self) -> None:
        self.rows: defaultdict[type, list[Any]] = defaultdict(list)
        self.commits = 0
        self._ids = itertools.count(1)

    def insert(self, row: Any) -> Any:
        if row.id is None:
            row.id = next(self._ids)
        self.rows[type(row)].append(row)
        return row

    def all(self, model: type) -> list[Any]:
        return list(self.rows[model])

    def find(self, model: type, predicate: Callable[[Any], bool]) -> Any | None:
        return next((row for row in self.rows[model] if predicate(row)), None)

    def remove(self, model: type, predicate: Callable[[Any], bool]) -> int:
        kept = [row for row in self.rows[model] if not predicate(row)]
        removed = len(self.rows[model]) - len(kept)
        self.rows[model] = kept
        return removed

    def snapshot(self) -> dict[type, list[Any]]:
        return {model: list(rows) for model, rows in self.rows.items()}

    def restore(self, snapshot: dict[type, list[Any]]) -> None:
        self.rows = defaultdict(list, snapshot)

    def count_referencing(self, integration_id: int) -> int:
        """Rows in any provider collection that still point at the integration."""
        models: Iterable[type] = itertools.chain.from_iterable(MIRROR_MODELS.values())
        return sum(1 for model in models for row in self.rows[model] if row.integration_id == integration_id)

    def total_rows(self) -> int:
        return sum(len(rows) for rows in self.rows.values())


class FakeSavepoint:
    def __init__(self, database: FakeDatabase) -> None:
        self._database = database
        self._snapshot: dict[type, list[Any]] = {}

    async def __aenter__(self) -> "FakeSavepoint":
        self._snapshot = self._database.snapshot()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        if exc_type is not None:
            self._database.restore(self._snapshot)
        return False


class FakeRepo:
    def __init__(self, database: FakeDatabase, model: type) -> None:
        self.database = database
        self.model = model

    async def get(self, id: Any) -> Any | None:
        return self.database.find(self.model, lambda row: row.id == id)

    async def add(self, model: Any, commit: bool = False) -> None:
        self.database.insert(model)
        if commit:
            await self.commit()

    async def update(self, model: Any, values: dict[str, Any]) -> Any:
        for key, value in values.items():
            setattr(model, key, value)
        return model

    async def delete(self, model: Any) -> None:
        self.database.remove(type(model), lambda row: row is model)

    async def commit(self) -> None:
        self.database.commits += 1

    async def rollback(self) -> None:
        pass

    async def flush(self) -> None:
        pass

    def savepoint(self) -> FakeSavepoint:
        return FakeSavepoint(self.database)


class FakeAccountRepo(FakeRepo):
    def __init__(self, database: FakeDatabase) -> None:
        super().__init__(database, Account)

    async def get_by_uuid(self, uuid: UUID) -> Account | None:
        return self.database.find(Account, lambda row: row.uuid == uuid)

    async def get_by_nylas_account_id(self, nylas_account_id: str) -> Account | None:
        return self.database.find(Account, lambda row: row.nylas_account_id == nylas_account_id)


class FakeIntegrationRepo(FakeRepo):
    def __init__(self, database: FakeDatabase) -> None:
        super().__init__(database, Integration)

    async def get_by_identifier(self, identifier: str) -> Integration | None:
        account_ids = {row.id for row in self.database.all(Account) if str(row.uuid) == identifier}
        return self.database.find(
            Integration, lambda row: row.erxes_api_id == identifier or row.account_id in account_ids
        )

    async def get_by_erxes_api_id(self, erxes_api_id: str) -> Integration | None:
        return self.database.find(Integration, lambda row: row.erxes_api_id == erxes_api_id)

    async def get_by_account_id(self, account_id: int) -> Integration | None:
        return self.database.find(Integration, lambda row: row.account_id == account_id)

    async def set_status(self, integration: Integration, status: IntegrationStatus) -> Integration:
        integration.status = status
        return integration

    async def delete_by_id(self, integration_id: int) -> int:
        return self.database.remove(Integration, lambda row: row.id == integration_id)


class FakeMirrorRepo(FakeRepo):
    """Covers the customer, conversation and conversation message repositories."""

    def _in_integration(self, integration_id: int, **fields: Any) -> Any | None:
        return self.database.find(
            self.model,
            lambda row: row.integration_id == integration_id
            and all(getattr(row, key) == value for key, value in fields.items()),
        )

    async def get_or_create_by_email(self, integration_id: int, email: str, **values: Any) -> Any:
        existing = self._in_integration(integration_id, email=email)
        if existing is not None:
            return existing
        return self.database.insert(self.model(integration_id=integration_id, email=email, **values))

    async def get_ids_by_integration(self, integration_id: int) -> list[int]:
        return [row.id for row in self.database.all(self.model) if row.integration_id == integration_id]

    async def get_or_create_by_thread_id(self, integration_id: int, thread_id: str, **values: Any) -> Any:
        existing = self._in_integration(integration_id, thread_id=thread_id)
        if existing is not None:
            return existing
        return self.database.insert(self.model(integration_id=integration_id, thread_id=thread_id, **values))

    async def get_by_message_id(self, integration_id: int, message_id: str) -> Any | None:
        return self._in_integration(integration_id, message_id=message_id)

    async def get_by_erxes_api_message_id(self, integration_id: int, erxes_api_message_id: str) -> Any | None:
        return self._in_integration(integration_id, erxes_api_message_id=erxes_api_message_id)

    async def create_if_absent(self, integration_id: int, message_id: str, **values: Any) -> Any:
        existing = self._in_integration(integration_id, message_id=message_id)
        if existing is not None:
            return existing
        return self.database.insert(self.model(integration_id=integration_id, message_id=message_id, **values))

    async def delete_by_conversation_ids(self, conversation_ids: Sequence[int]) -> int:
        ids = set(conversation_ids)
        return self.database.remove(self.model, lambda row: row.conversation_id in ids)

    async def delete_by_integration(self, integration_id: int) -> int:
        return self.database.remove(self.model, lambda row: row.integration_id == integration_id)


class FakePageRepo(FakeRepo):
    """Facebook posts and comments, keyed by page id."""

    async def delete_by_recipient_ids(self, page_ids: Sequence[str]) -> int:
        ids = set(page_ids)
        return self.database.remove(self.model, lambda row: row.recipient_id in ids)


def build_fake_repos(database: FakeDatabase) -> dict[str, FakeRepo]:
    """Fake repositories keyed by their provider name on ``RepoContainer``."""
    repos: dict[str, FakeRepo] = {
        "account": FakeAccountRepo(database),
        "integration": FakeIntegrationRepo(database),
        "facebook_post": FakePageRepo(database, FacebookPost),
        "facebook_comment": FakePageRepo(database, FacebookComment),
    }
    for prefix, (customer, conversation, message) in MIRROR_MODELS.items():
        repos[f"{prefix}_customer"] = FakeMirrorRepo(database, customer)
        repos[f"{prefix}_conversation"] = FakeMirrorRepo(database, conversation)
        repos[f"{prefix}_conversation_message"] = FakeMirrorRepo(database, message)
    return repos
