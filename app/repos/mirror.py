from typing import Any, Sequence, TypeVar

from sqlalchemy import select

from app.models.base import Base
from app.repos.base import BaseRepo

MirrorType = TypeVar("MirrorType", bound=Base)


class CustomerRepo(BaseRepo[MirrorType]):
    """Customers mirrored for one provider family."""

    async def get_by_email(self, integration_id: int, email: str) -> MirrorType | None:
        result = await self.execute(
            self.base_stmt.where(
                self._model.integration_id == integration_id,  # type: ignore[attr-defined]
                self._model.email == email,  # type: ignore[attr-defined]
            )
        )
        return result.one_or_none()

    async def get_or_create_by_email(self, integration_id: int, email: str, **values: Any) -> MirrorType:
        """Create the customer unless a concurrent request already did."""
        await self.insert_ignore(
            {"integration_id": integration_id, "email": email, **values}, ["integration_id", "email"]
        )
        customer = await self.get_by_email(integration_id, email)
        if customer is None:
            raise ValueError(f"Failed to create/load customer {email} for integration {integration_id}")
        return customer

    async def delete_by_integration(self, integration_id: int) -> int:
        return await self.delete_where(self._model.integration_id == integration_id)  # type: ignore[attr-defined]


class ConversationRepo(BaseRepo[MirrorType]):
    """Conversations mirrored for one provider family."""

    async def get_ids_by_integration(self, integration_id: int) -> list[int]:
        """Snapshot of the conversation ids owned by an integration."""
        result = await self._db.session.execute(
            select(self._model.id).where(self._model.integration_id == integration_id)  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_by_thread_id(self, integration_id: int, thread_id: str) -> MirrorType | None:
        result = await self.execute(
            self.base_stmt.where(
                self._model.integration_id == integration_id,  # type: ignore[attr-defined]
                self._model.thread_id == thread_id,  # type: ignore[attr-defined]
            )
        )
        return result.one_or_none()

    async def get_or_create_by_thread_id(self, integration_id: int, thread_id: str, **values: Any) -> MirrorType:
        await self.insert_ignore(
            {"integration_id": integration_id, "thread_id": thread_id, **values}, ["integration_id", "thread_id"]
        )
        conversation = await self.get_by_thread_id(integration_id, thread_id)
        if conversation is None:
            raise ValueError(f"Failed to create/load conversation {thread_id} for integration {integration_id}")
        return conversation

    async def delete_by_integration(self, integration_id: int) -> int:
        return await self.delete_where(self._model.integration_id == integration_id)  # type: ignore[attr-defined]


class ConversationMessageRepo(BaseRepo[MirrorType]):
    """Conversation messages mirrored for one provider family."""

    async def get_by_erxes_api_message_id(self, integration_id: int, erxes_api_message_id: str) -> MirrorType | None:
        result = await self.execute(
            self.base_stmt.where(
                self._model.integration_id == integration_id,  # type: ignore[attr-defined]
                self._model.erxes_api_message_id == erxes_api_message_id,  # type: ignore[attr-defined]
            )
        )
        return result.first()

    async def get_by_message_id(self, integration_id: int, message_id: str) -> MirrorType | None:
        result = await self.execute(
            self.base_stmt.where(
                self._model.integration_id == integration_id,  # type: ignore[attr-defined]
                self._model.message_id == message_id,  # type: ignore[attr-defined]
            )
        )
        return result.one_or_none()

    async def create_if_absent(self, integration_id: int, message_id: str, **values: Any) -> MirrorType:
        """Store a provider message once; a re-delivered message returns the stored row."""
        await self.insert_ignore(
            {"integration_id": integration_id, "message_id": message_id, **values}, ["integration_id", "message_id"]
        )
        message = await self.get_by_message_id(integration_id, message_id)
        if message is None:
            raise ValueError(f"Failed to create/load message {message_id} for integration {integration_id}")
        return message

    async def delete_by_conversation_ids(self, conversation_ids: Sequence[int]) -> int:
        if not conversation_ids:
            return 0
        return await self.delete_where(self._model.conversation_id.in_(conversation_ids))  # type: ignore[attr-defined]

    async def delete_by_integration(self, integration_id: int) -> int:
        return await self.delete_where(self._model.integration_id == integration_id)  # type: ignore[attr-defined]
