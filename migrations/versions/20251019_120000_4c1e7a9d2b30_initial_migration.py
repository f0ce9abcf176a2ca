"""initial_migration

Revision ID: 4c1e7a9d2b30
Revises:
Create Date: 2025-10-19 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4c1e7a9d2b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EMAIL_FAMILIES = ("gmail", "nylas_gmail", "nylas_office365")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _jsonb_list(name: str) -> sa.Column:
    return sa.Column(name, postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'[]'"), nullable=False)


def _customer_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.Column("integration_id", sa.BigInteger(), nullable=False),
        sa.Column("erxes_api_id", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["integration_id"], ["integrations.id"]),
        sa.PrimaryKeyConstraint("id"),
    ]


def _conversation_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.Column("integration_id", sa.BigInteger(), nullable=False),
        sa.Column("customer_id", sa.BigInteger(), nullable=True),
        sa.Column("erxes_api_id", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["integration_id"], ["integrations.id"]),
        sa.PrimaryKeyConstraint("id"),
    ]


def _message_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.Column("integration_id", sa.BigInteger(), nullable=False),
        sa.Column("conversation_id", sa.BigInteger(), nullable=False),
        sa.Column("customer_id", sa.BigInteger(), nullable=True),
        sa.Column("erxes_api_message_id", sa.String(length=255), nullable=True),
        sa.Column("message_id", sa.String(length=255), nullable=False, comment="Provider message id"),
        sa.ForeignKeyConstraint(["integration_id"], ["integrations.id"]),
        sa.PrimaryKeyConstraint("id"),
    ]


def _email_message_columns() -> list[sa.Column]:
    return [
        sa.Column("thread_id", sa.String(length=255), nullable=True),
        sa.Column("subject", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("snippet", sa.Text(), nullable=True),
        _jsonb_list("from"),
        _jsonb_list("to"),
        _jsonb_list("cc"),
        _jsonb_list("bcc"),
        _jsonb_list("reply_to"),
        _jsonb_list("files"),
        _jsonb_list("labels"),
        sa.Column("unread", sa.Boolean(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
    ]


def _index_mirror(table: str, columns: Sequence[str]) -> None:
    for column in columns:
        op.create_index(op.f(f"ix_{table}_{column}"), table, [column], unique=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "accounts",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("uuid", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False),
        *_timestamps(),
        sa.Column("kind", sa.String(length=50), nullable=False),
        sa.Column("uid", sa.String(length=255), nullable=False, comment="Provider uid or email"),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("token", sa.Text(), nullable=False, comment="Encrypted access token"),
        sa.Column("token_secret", sa.Text(), nullable=True, comment="Encrypted refresh token"),
        sa.Column("expire_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scope", sa.Text(), nullable=True),
        sa.Column("nylas_token", sa.Text(), nullable=True, comment="Encrypted hosted-auth token"),
        sa.Column("nylas_account_id", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("nylas_account_id"),
    )
    op.create_index(op.f("ix_accounts_uuid"), "accounts", ["uuid"], unique=False)
    op.create_index(op.f("ix_accounts_uid"), "accounts", ["uid"], unique=False)

    op.create_table(
        "integrations",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("uuid", sa.UUID(), server_default=sa.text("uuid_generate_v4()"), nullable=False),
        *_timestamps(),
        sa.Column("erxes_api_id", sa.String(length=255), nullable=False),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column("kind", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        _jsonb_list("facebook_page_ids"),
        sa.Column("status", sa.String(length=50), server_default="pending", nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("erxes_api_id"),
    )
    op.create_index(op.f("ix_integrations_uuid"), "integrations", ["uuid"], unique=False)
    op.create_index(op.f("ix_integrations_account_id"), "integrations", ["account_id"], unique=False)

    # Facebook
    op.create_table(
        "facebook_customers",
        *_customer_columns(),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("profile_pic", sa.Text(), nullable=True),
        sa.UniqueConstraint("integration_id", "user_id", name="uq_facebook_customer_user"),
    )
    op.create_table(
        "facebook_conversations",
        *_conversation_columns(),
        sa.Column("sender_id", sa.String(length=255), nullable=False),
        sa.Column("recipient_id", sa.String(length=255), nullable=False, comment="Facebook page id"),
        sa.Column("content", sa.Text(), nullable=True),
    )
    op.create_table(
        "facebook_conversation_messages",
        *_message_columns(),
        sa.Column("content", sa.Text(), nullable=True),
        _jsonb_list("attachments"),
        sa.UniqueConstraint("integration_id", "message_id", name="uq_facebook_message"),
    )
    op.create_table(
        "facebook_posts",
        sa.Column("id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.Column("post_id", sa.String(length=255), nullable=False),
        sa.Column("recipient_id", sa.String(length=255), nullable=False),
        sa.Column("sender_id", sa.String(length=255), nullable=True),
        sa.Column("erxes_api_id", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id"),
    )
    op.create_index(op.f("ix_facebook_posts_recipient_id"), "facebook_posts", ["recipient_id"], unique=False)
    op.create_table(
        "facebook_comments",
        sa.Column("id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.Column("comment_id", sa.String(length=255), nullable=False),
        sa.Column("post_id", sa.String(length=255), nullable=False),
        sa.Column("recipient_id", sa.String(length=255), nullable=False),
        sa.Column("sender_id", sa.String(length=255), nullable=True),
        sa.Column("parent_id", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id"),
    )
    op.create_index(op.f("ix_facebook_comments_post_id"), "facebook_comments", ["post_id"], unique=False)
    op.create_index(op.f("ix_facebook_comments_recipient_id"), "facebook_comments", ["recipient_id"], unique=False)

    # Email families share one layout
    for family in EMAIL_FAMILIES:
        op.create_table(
            f"{family}_customers",
            *_customer_columns(),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.UniqueConstraint("integration_id", "email", name=f"uq_{family}_customer_email"),
        )
        op.create_table(
            f"{family}_conversations",
            *_conversation_columns(),
            sa.Column("thread_id", sa.String(length=255), nullable=False),
            sa.Column("subject", sa.Text(), nullable=True),
            sa.UniqueConstraint("integration_id", "thread_id", name=f"uq_{family}_conversation_thread"),
        )
        extra = [sa.Column("history_id", sa.String(length=255), nullable=True)] if family == "gmail" else []
        op.create_table(
            f"{family}_conversation_messages",
            *_message_columns(),
            *_email_message_columns(),
            *extra,
            sa.UniqueConstraint("integration_id", "message_id", name=f"uq_{family}_message"),
        )

    # CallPro
    op.create_table(
        "callpro_customers",
        *_customer_columns(),
        sa.Column("phone_number", sa.String(length=50), nullable=False),
        sa.UniqueConstraint("integration_id", "phone_number", name="uq_callpro_customer_phone"),
    )
    op.create_table(
        "callpro_conversations",
        *_conversation_columns(),
        sa.Column("call_id", sa.String(length=255), nullable=False),
        sa.Column("state", sa.String(length=50), nullable=True),
    )
    op.create_table(
        "callpro_conversation_messages",
        *_message_columns(),
        sa.Column("content", sa.Text(), nullable=True),
        sa.UniqueConstraint("integration_id", "message_id", name="uq_callpro_message"),
    )

    for family in ("facebook", "callpro", *EMAIL_FAMILIES):
        _index_mirror(f"{family}_customers", ["integration_id"])
        _index_mirror(f"{family}_conversations", ["integration_id"])
        _index_mirror(
            f"{family}_conversation_messages", ["integration_id", "conversation_id", "erxes_api_message_id"]
        )


def downgrade() -> None:
    """Downgrade schema."""
    for family in ("callpro", *reversed(EMAIL_FAMILIES), "facebook"):
        op.drop_table(f"{family}_conversation_messages")
        op.drop_table(f"{family}_conversations")
        op.drop_table(f"{family}_customers")

    op.drop_index(op.f("ix_facebook_comments_recipient_id"), table_name="facebook_comments")
    op.drop_index(op.f("ix_facebook_comments_post_id"), table_name="facebook_comments")
    op.drop_table("facebook_comments")
    op.drop_index(op.f("ix_facebook_posts_recipient_id"), table_name="facebook_posts")
    op.drop_table("facebook_posts")

    op.drop_index(op.f("ix_integrations_account_id"), table_name="integrations")
    op.drop_index(op.f("ix_integrations_uuid"), table_name="integrations")
    op.drop_table("integrations")
    op.drop_index(op.f("ix_accounts_uid"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_uuid"), table_name="accounts")
    op.drop_table("accounts")
