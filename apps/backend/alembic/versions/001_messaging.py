"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_messaging (Alembic Migration)

Responsibilities:
  - Crear el esquema de mensajería desde cero.
  - users: perfil público (la tabla la llena el servicio de identidad).
  - conversations: una fila por par no ordenado (user_low < user_high).
  - messages: log append-only con seq de inserción para orden estable.
  - notifications: eventos por recipient.

Policy:
  - Migración BASELINE. Downgrade elimina todo.
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>,
      fk_<tabla>_<col>__<ref_tabla>, ck_<tabla>_<regla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_messaging"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NOTIFICATION_TYPES = (
    "like",
    "comment",
    "follow",
    "join_request",
    "message",
    "team_invite",
    "endorsement",
)


def _uuid_col(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), **kwargs)


def _timestamp_col(name: str, *, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("now()"),
    )


def upgrade() -> None:
    # =========================================================
    # Users (solo lectura para este servicio)
    # =========================================================
    op.create_table(
        "users",
        _uuid_col("id", nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("avatar_url", sa.Text, nullable=True),
        _timestamp_col("last_active_at", nullable=True),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.text("true")
        ),
        _timestamp_col("created_at"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )

    # =========================================================
    # Conversations
    # =========================================================
    op.create_table(
        "conversations",
        _uuid_col("id", nullable=False),
        _uuid_col("user_low", nullable=False),
        _uuid_col("user_high", nullable=False),
        _uuid_col("last_message_id", nullable=True),
        _timestamp_col("last_message_at", nullable=True),
        sa.Column(
            "unread_counts",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _timestamp_col("created_at"),
        _timestamp_col("updated_at"),
        sa.PrimaryKeyConstraint("id", name="pk_conversations"),
        sa.UniqueConstraint(
            "user_low", "user_high", name="uq_conversations_user_low_user_high"
        ),
        sa.CheckConstraint("user_low < user_high", name="ck_conversations_pair_order"),
        sa.ForeignKeyConstraint(
            ["user_low"], ["users.id"], name="fk_conversations_user_low__users"
        ),
        sa.ForeignKeyConstraint(
            ["user_high"], ["users.id"], name="fk_conversations_user_high__users"
        ),
    )
    op.create_index("ix_conversations_user_low", "conversations", ["user_low"])
    op.create_index("ix_conversations_user_high", "conversations", ["user_high"])

    # =========================================================
    # Messages
    # =========================================================
    op.create_table(
        "messages",
        sa.Column("seq", sa.BigInteger, sa.Identity(always=True), nullable=False),
        _uuid_col("id", nullable=False),
        _uuid_col("conversation_id", nullable=False),
        _uuid_col("sender_id", nullable=False),
        _uuid_col("receiver_id", nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("read", sa.Boolean, nullable=False, server_default=sa.text("false")),
        _timestamp_col("read_at", nullable=True),
        _timestamp_col("created_at"),
        sa.PrimaryKeyConstraint("id", name="pk_messages"),
        sa.UniqueConstraint("seq", name="uq_messages_seq"),
        sa.CheckConstraint(
            "sender_id <> receiver_id", name="ck_messages_distinct_participants"
        ),
        sa.CheckConstraint("length(btrim(content)) > 0", name="ck_messages_content"),
        sa.ForeignKeyConstraint(
            ["conversation_id"],
            ["conversations.id"],
            name="fk_messages_conversation_id__conversations",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_messages_conversation_id",
        "messages",
        ["conversation_id", "created_at", "seq"],
    )
    # Bulk read del hilo: (conversation, receiver) con read = false
    op.create_index(
        "ix_messages_unread",
        "messages",
        ["conversation_id", "receiver_id"],
        postgresql_where=sa.text("read = false"),
    )

    # =========================================================
    # Notifications
    # =========================================================
    op.create_table(
        "notifications",
        _uuid_col("id", nullable=False),
        _uuid_col("recipient_id", nullable=False),
        sa.Column("type", sa.Text, nullable=False),
        _uuid_col("from_user_id", nullable=False),
        sa.Column("message", sa.Text, nullable=False, server_default=sa.text("''")),
        sa.Column("read", sa.Boolean, nullable=False, server_default=sa.text("false")),
        _timestamp_col("created_at"),
        sa.PrimaryKeyConstraint("id", name="pk_notifications"),
        sa.CheckConstraint(
            "type IN ({})".format(", ".join(f"'{t}'" for t in NOTIFICATION_TYPES)),
            name="ck_notifications_type",
        ),
    )
    op.create_index(
        "ix_notifications_recipient_id",
        "notifications",
        ["recipient_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("messages")
    op.drop_table("conversations")
    op.drop_table("users")
