import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .mirror import MirrorConversationMixin, MirrorCustomerMixin, MirrorMessageMixin


class CallProCustomer(Base, MirrorCustomerMixin):
    __tablename__ = "callpro_customers"

    phone_number: Mapped[str] = mapped_column(sa.String(50), nullable=False)

    __table_args__ = (sa.UniqueConstraint("integration_id", "phone_number", name="uq_callpro_customer_phone"),)


class CallProConversation(Base, MirrorConversationMixin):
    __tablename__ = "callpro_conversations"

    call_id: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    state: Mapped[str | None] = mapped_column(sa.String(50), nullable=True)


class CallProConversationMessage(Base, MirrorMessageMixin):
    __tablename__ = "callpro_conversation_messages"

    content: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)

    __table_args__ = (sa.UniqueConstraint("integration_id", "message_id", name="uq_callpro_message"),)
