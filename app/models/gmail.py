import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .mirror import EmailConversationMixin, EmailCustomerMixin, EmailMessageMixin


class GmailCustomer(Base, EmailCustomerMixin):
    __tablename__ = "gmail_customers"

    __table_args__ = (sa.UniqueConstraint("integration_id", "email", name="uq_gmail_customer_email"),)


class GmailConversation(Base, EmailConversationMixin):
    __tablename__ = "gmail_conversations"

    __table_args__ = (sa.UniqueConstraint("integration_id", "thread_id", name="uq_gmail_conversation_thread"),)


class GmailConversationMessage(Base, EmailMessageMixin):
    __tablename__ = "gmail_conversation_messages"

    history_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)

    __table_args__ = (sa.UniqueConstraint("integration_id", "message_id", name="uq_gmail_message"),)
