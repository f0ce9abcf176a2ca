from typing import Any

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .mirror import MirrorConversationMixin, MirrorCustomerMixin, MirrorMessageMixin


class FacebookCustomer(Base, MirrorCustomerMixin):
    __tablename__ = "facebook_customers"

    user_id: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    profile_pic: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)

    __table_args__ = (sa.UniqueConstraint("integration_id", "user_id", name="uq_facebook_customer_user"),)


class FacebookConversation(Base, MirrorConversationMixin):
    __tablename__ = "facebook_conversations"

    sender_id: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    recipient_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, comment="Facebook page id")
    content: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)


class FacebookConversationMessage(Base, MirrorMessageMixin):
    __tablename__ = "facebook_conversation_messages"

    content: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSONB(), nullable=False, server_default=sa.text("'[]'"))

    __table_args__ = (sa.UniqueConstraint("integration_id", "message_id", name="uq_facebook_message"),)


class FacebookPost(Base, TimestampMixin):
    """Page post mirrored for comment threads. Keyed by page, not by integration."""

    __tablename__ = "facebook_posts"

    post_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, unique=True)
    recipient_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, index=True)
    sender_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    erxes_api_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    content: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)


class FacebookComment(Base, TimestampMixin):
    __tablename__ = "facebook_comments"

    comment_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, unique=True)
    post_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, index=True)
    recipient_id: Mapped[str] = mapped_column(sa.String(255), nullable=False, index=True)
    sender_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    parent_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    content: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
