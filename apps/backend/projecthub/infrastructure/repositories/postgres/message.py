"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/message.py
============================================================
Class: PostgresMessageRepository

Responsibilities:
- Persistir el log de mensajes (append-only + hard delete del sender).
- Orden estable: created_at ASC, seq ASC (seq = identity de inserción).
- Bulk update de lectura (read/read_at) por receiver.

Collaborators:
- domain.entities.Message
- postgres._base.PostgresRepositoryBase
- Tabla: messages
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Message
from ._base import PostgresRepositoryBase

_COLUMNS = """
    id, conversation_id, sender_id, receiver_id, content,
    read, read_at, created_at
"""


class PostgresMessageRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de Messages."""

    @staticmethod
    def _row_to_message(row: tuple) -> Message:
        (
            message_id,
            conversation_id,
            sender_id,
            receiver_id,
            content,
            read,
            read_at,
            created_at,
        ) = row
        return Message(
            id=message_id,
            conversation_id=conversation_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            read=bool(read),
            read_at=read_at,
            created_at=created_at,
        )

    def add_message(self, message: Message) -> Message:
        row = self._fetchone(
            query=f"""
                INSERT INTO messages (
                    id, conversation_id, sender_id, receiver_id,
                    content, read, read_at, created_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()))
                RETURNING {_COLUMNS}
            """,
            params=[
                message.id,
                message.conversation_id,
                message.sender_id,
                message.receiver_id,
                message.content,
                message.read,
                message.read_at,
                message.created_at,
            ],
            context_msg="PostgresMessageRepository: Failed to add message",
            extra={
                "message_id": str(message.id),
                "conversation_id": str(message.conversation_id),
            },
        )
        if not row:
            raise DatabaseError(
                "PostgresMessageRepository: Failed to add message: no row returned"
            )
        return self._row_to_message(row)

    def get_message(self, message_id: UUID) -> Optional[Message]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM messages WHERE id = %s",
            params=[message_id],
            context_msg="PostgresMessageRepository: Failed to get message",
            extra={"message_id": str(message_id)},
        )
        return None if not row else self._row_to_message(row)

    def list_messages(self, conversation_id: UUID) -> list[Message]:
        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS}
                FROM messages
                WHERE conversation_id = %s
                ORDER BY created_at ASC, seq ASC
            """,
            params=[conversation_id],
            context_msg="PostgresMessageRepository: Failed to list messages",
            extra={"conversation_id": str(conversation_id)},
        )
        return [self._row_to_message(r) for r in rows]

    def latest_message(self, conversation_id: UUID) -> Optional[Message]:
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS}
                FROM messages
                WHERE conversation_id = %s
                ORDER BY created_at DESC, seq DESC
                LIMIT 1
            """,
            params=[conversation_id],
            context_msg="PostgresMessageRepository: Failed to get latest message",
            extra={"conversation_id": str(conversation_id)},
        )
        return None if not row else self._row_to_message(row)

    def mark_read(
        self, conversation_id: UUID, receiver_id: UUID, *, read_at: datetime
    ) -> int:
        return self._execute(
            query="""
                UPDATE messages
                SET read = TRUE, read_at = %s
                WHERE conversation_id = %s
                  AND receiver_id = %s
                  AND read = FALSE
            """,
            params=[read_at, conversation_id, receiver_id],
            context_msg="PostgresMessageRepository: Failed to mark messages read",
            extra={
                "conversation_id": str(conversation_id),
                "receiver_id": str(receiver_id),
            },
        )

    def count_unread(self, conversation_id: UUID, receiver_id: UUID) -> int:
        row = self._fetchone(
            query="""
                SELECT COUNT(*)
                FROM messages
                WHERE conversation_id = %s
                  AND receiver_id = %s
                  AND read = FALSE
            """,
            params=[conversation_id, receiver_id],
            context_msg="PostgresMessageRepository: Failed to count unread",
            extra={
                "conversation_id": str(conversation_id),
                "receiver_id": str(receiver_id),
            },
        )
        return int(row[0]) if row else 0

    def delete_message(self, message_id: UUID) -> bool:
        deleted = self._execute(
            query="DELETE FROM messages WHERE id = %s",
            params=[message_id],
            context_msg="PostgresMessageRepository: Failed to delete message",
            extra={"message_id": str(message_id)},
        )
        return deleted > 0
