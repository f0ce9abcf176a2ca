from uuid import UUID

from app.models.account import Account
from app.repos.base import BaseRepo


class AccountRepo(BaseRepo[Account]):
    """Repository for Account model operations."""

    def __init__(self) -> None:
        super().__init__(Account)

    async def get_by_uuid(self, uuid: UUID) -> Account | None:
        """Get account by its public UUID."""
        result = await self.execute(self.base_stmt.where(Account.uuid == uuid))
        return result.one_or_none()

    async def get_by_nylas_account_id(self, nylas_account_id: str) -> Account | None:
        """Get account by the hosted-auth account id Nylas reports in webhook deltas."""
        result = await self.execute(self.base_stmt.where(Account.nylas_account_id == nylas_account_id))
        return result.one_or_none()

    async def get_by_uid(self, uid: str) -> Account | None:
        """Get account by provider uid (usually the mailbox address)."""
        result = await self.execute(self.base_stmt.where(Account.uid == uid))
        return result.first()
