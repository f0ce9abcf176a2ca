from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, WithUUID


class Account(Base, WithUUID, TimestampMixin):
    """A connected mailbox, page owner or call-center account.

    Tokens are stored encrypted, see ``app.utils.secrets.SecretUtils``.
    """

    __tablename__ = "accounts"

    kind: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    uid: Mapped[str] = mapped_column(sa.String(255), nullable=False, index=True, comment="Provider uid or email")
    email: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    token: Mapped[str] = mapped_column(sa.Text(), nullable=False, comment="Encrypted access token")
    token_secret: Mapped[str | None] = mapped_column(sa.Text(), nullable=True, comment="Encrypted refresh token")
    expire_date: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
    scope: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    nylas_token: Mapped[str | None] = mapped_column(sa.Text(), nullable=True, comment="Encrypted hosted-auth token")
    nylas_account_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True, unique=True)

    def __repr__(self) -> str:
        return f"<Account(uid='{self.uid}', kind='{self.kind}')>"
