import sqlalchemy as sa

from .base import Base
from .mirror import EmailConversationMixin, EmailCustomerMixin, EmailMessageMixin


class NylasGmailCustomer(Base, EmailCustomerMixin):
    __tablename__ = "nylas_gmail_customers"

    __table_args__ = (sa.UniqueConstraint("integration_id", "email", name="uq_nylas_gmail_customer_email"),)


class NylasGmailConversation(Base, EmailConversationMixin):
    __tablename__ = "nylas_gmail_conversations"

    __table_args__ = (sa.UniqueConstraint("integration_id", "thread_id", name="uq_nylas_gmail_conversation_thread"),)


class NylasGmailConversationMessage(Base, EmailMessageMixin):
    __tablename__ = "nylas_gmail_conversation_messages"

    __table_args__ = (sa.UniqueConstraint("integration_id", "message_id", name="uq_nylas_gmail_message"),)


class NylasOffice365Customer(Base, EmailCustomerMixin):
    __tablename__ = "nylas_office365_customers"

    __table_args__ = (sa.UniqueConstraint("integration_id", "email", name="uq_nylas_office365_customer_email"),)


class NylasOffice365Conversation(Base, EmailConversationMixin):
    __tablename__ = "nylas_office365_conversations"

    __table_args__ = (
        sa.UniqueConstraint("integration_id", "thread_id", name="uq_nylas_office365_conversation_thread"),
    )


class NylasOffice365ConversationMessage(Base, EmailMessageMixin):
    __tablename__ = "nylas_office365_conversation_messages"

    __table_args__ = (sa.UniqueConstraint("integration_id", "message_id", name="uq_nylas_office365_message"),)
