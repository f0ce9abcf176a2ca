from enum import Enum

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, WithUUID
from .decorators.types import EnumStringType


class IntegrationStatus(Enum):
    pending = "pending"
    active = "active"
    revoked = "revoked"


class Integration(Base, WithUUID, TimestampMixin):
    """Binds a CRM-side integration id to a provider account."""

    __tablename__ = "integrations"

    erxes_api_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, unique=True)
    account_id: Mapped[int] = mapped_column(sa.ForeignKey("accounts.id"), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    facebook_page_ids: Mapped[list[str]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    status: Mapped[IntegrationStatus] = mapped_column(
        EnumStringType(IntegrationStatus), nullable=False, server_default=IntegrationStatus.pending.name
    )

    def __repr__(self) -> str:
        return f"<Integration(erxes_api_id='{self.erxes_api_id}', kind='{self.kind}', status='{self.status.name}')>"
