"""
Column mixins shared by the per-provider mirror tables.

Every provider family owns its own customers / conversations / conversation messages
tables. They all hang off an integration; messages also carry the id of the local
conversation they belong to.
"""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import TimestampMixin


class MirrorCustomerMixin(TimestampMixin):
    integration_id: Mapped[int] = mapped_column(sa.ForeignKey("integrations.id"), nullable=False, index=True)
    erxes_api_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)


class MirrorConversationMixin(TimestampMixin):
    integration_id: Mapped[int] = mapped_column(sa.ForeignKey("integrations.id"), nullable=False, index=True)
    customer_id: Mapped[int | None] = mapped_column(sa.BigInteger(), nullable=True)
    erxes_api_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)


class MirrorMessageMixin(TimestampMixin):
    integration_id: Mapped[int] = mapped_column(sa.ForeignKey("integrations.id"), nullable=False, index=True)
    conversation_id: Mapped[int] = mapped_column(sa.BigInteger(), nullable=False, index=True)
    customer_id: Mapped[int | None] = mapped_column(sa.BigInteger(), nullable=True)
    erxes_api_message_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True, index=True)
    message_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, comment="Provider message id")


class EmailCustomerMixin(MirrorCustomerMixin):
    email: Mapped[str] = mapped_column(sa.String(255), nullable=False)


class EmailConversationMixin(MirrorConversationMixin):
    thread_id: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    subject: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)


class EmailMessageMixin(MirrorMessageMixin):
    thread_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    subject: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    body: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    snippet: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    from_: Mapped[list[dict[str, Any]]] = mapped_column(
        "from", JSONB(), nullable=False, server_default=sa.text("'[]'")
    )
    to: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    cc: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    bcc: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    reply_to: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    files: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    labels: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))
    unread: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=True)
    date: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
