from uuid import UUID

from sqlalchemy import ScalarResult, or_, select

from app.models.account import Account
from app.models.integration import Integration, IntegrationStatus
from app.repos.base import BaseRepo


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


class IntegrationRepo(BaseRepo[Integration]):
    """Repository for Integration model operations."""

    def __init__(self) -> None:
        super().__init__(Integration)

    async def get_by_identifier(self, identifier: str) -> Integration | None:
        """Get integration by its CRM-side id or by the public id of its account."""
        account_uuid = _parse_uuid(identifier)
        if account_uuid is None:
            return await self.get_by_erxes_api_id(identifier)

        account_ids = select(Account.id).where(Account.uuid == account_uuid).scalar_subquery()
        query = self.base_stmt.where(
            or_(Integration.erxes_api_id == identifier, Integration.account_id == account_ids)
        ).order_by(Integration.id)
        result = await self.execute(query)
        return result.first()

    async def get_by_erxes_api_id(self, erxes_api_id: str) -> Integration | None:
        """Get integration by its CRM-side id."""
        result = await self.execute(self.base_stmt.where(Integration.erxes_api_id == erxes_api_id))
        return result.one_or_none()

    async def get_by_account_id(self, account_id: int) -> Integration | None:
        """Get the integration bound to an account."""
        result = await self.execute(
            self.base_stmt.where(Integration.account_id == account_id).order_by(Integration.id)
        )
        return result.first()

    async def get_all(self) -> ScalarResult[Integration]:
        """Get all integrations."""
        return await self.execute(self.base_stmt.order_by(Integration.id))

    async def set_status(self, integration: Integration, status: IntegrationStatus) -> Integration:
        """Move an integration to a new lifecycle status."""
        return await self.update(integration, {"status": status})

    async def delete_by_id(self, integration_id: int) -> int:
        """Delete the integration row by primary key."""
        return await self.delete_where(Integration.id == integration_id)
