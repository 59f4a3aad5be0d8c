"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/conversation.py
============================================================
Class: PostgresConversationRepository

Responsibilities:
- Persistir conversaciones en PostgreSQL (SQL crudo).
- Garantizar una conversación por par vía UNIQUE(user_low, user_high):
    INSERT ... ON CONFLICT DO NOTHING RETURNING
- Mutar last message + la entrada de unread del usuario en UN solo UPDATE,
  con la fila bloqueada (SELECT ... FOR UPDATE en la misma transacción).
- La entrada de unread se recuenta desde messages (subquery) con la fila
  bloqueada.

Collaborators:
- domain.entities.Conversation, Message
- domain.repositories.DuplicateConversationError
- postgres._base.PostgresRepositoryBase
- Tablas: conversations, messages (solo lectura, para el recuento)

Constraints / Notes:
- unread_counts se guarda como jsonb {"<user uuid>": int}.
- Entradas faltantes en unread_counts cuentan como 0.
- Orden de listados: last_message_at DESC NULLS LAST, created_at DESC.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from psycopg.types.json import Jsonb

from ....domain.entities import Conversation, Message
from ....domain.pairing import PairKey
from ....domain.repositories import DuplicateConversationError
from ._base import PostgresRepositoryBase

_COLUMNS = """
    id, user_low, user_high, last_message_id, last_message_at,
    unread_counts, created_at, updated_at
"""

_LOCK_CONVERSATION = "SELECT id FROM conversations WHERE id = %s FOR UPDATE"

# R: nuevo valor de la entrada de unread (params: receiver_id)
_UNREAD_FROM_LOG = """
    to_jsonb((
        SELECT COUNT(*)::int
        FROM messages
        WHERE messages.conversation_id = conversations.id
          AND messages.receiver_id = %s
          AND messages.read = FALSE
    ))
"""


class PostgresConversationRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de Conversations."""

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_conversation(row: tuple) -> Conversation:
        (
            conversation_id,
            user_low,
            user_high,
            last_message_id,
            last_message_at,
            unread_counts,
            created_at,
            updated_at,
        ) = row

        return Conversation(
            id=conversation_id,
            participants=(user_low, user_high),
            last_message_id=last_message_id,
            last_message_at=last_message_at,
            unread_counts={
                UUID(str(k)): int(v) for k, v in (unread_counts or {}).items()
            },
            created_at=created_at,
            updated_at=updated_at,
        )

    def _to_optional(self, row: tuple | None) -> Optional[Conversation]:
        return None if not row else self._row_to_conversation(row)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_conversation(self, conversation_id: UUID) -> Optional[Conversation]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM conversations WHERE id = %s",
            params=[conversation_id],
            context_msg="PostgresConversationRepository: Failed to get conversation",
            extra={"conversation_id": str(conversation_id)},
        )
        return self._to_optional(row)

    def find_by_participants(self, participants: PairKey) -> Optional[Conversation]:
        user_low, user_high = participants
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS}
                FROM conversations
                WHERE user_low = %s AND user_high = %s
            """,
            params=[user_low, user_high],
            context_msg="PostgresConversationRepository: Failed to find conversation by pair",
            extra={"user_low": str(user_low), "user_high": str(user_high)},
        )
        return self._to_optional(row)

    def list_conversations_for_user(self, user_id: UUID) -> list[Conversation]:
        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS}
                FROM conversations
                WHERE user_low = %s OR user_high = %s
                ORDER BY last_message_at DESC NULLS LAST, created_at DESC
            """,
            params=[user_id, user_id],
            context_msg="PostgresConversationRepository: Failed to list conversations",
            extra={"user_id": str(user_id)},
        )
        return [self._row_to_conversation(r) for r in rows]

    # =========================================================
    # Escrituras
    # =========================================================
    def create_conversation(self, conversation: Conversation) -> Conversation:
        user_low, user_high = conversation.participants
        row = self._fetchone(
            query=f"""
                INSERT INTO conversations (
                    id, user_low, user_high, last_message_at, unread_counts
                )
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (user_low, user_high) DO NOTHING
                RETURNING {_COLUMNS}
            """,
            params=[
                conversation.id,
                user_low,
                user_high,
                conversation.last_message_at,
                Jsonb({str(k): v for k, v in conversation.unread_counts.items()}),
            ],
            context_msg="PostgresConversationRepository: Failed to create conversation",
            extra={"conversation_id": str(conversation.id)},
        )

        if not row:
            # ON CONFLICT: otro request creó el par primero
            raise DuplicateConversationError((user_low, user_high))
        return self._row_to_conversation(row)

    def record_message(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        sent_at: datetime,
        receiver_id: UUID,
    ) -> Optional[Conversation]:
        row = self._fetchone_with_row_lock(
            lock_query=_LOCK_CONVERSATION,
            lock_params=[conversation_id],
            query=f"""
                UPDATE conversations
                SET last_message_id = %s,
                    last_message_at = %s,
                    unread_counts = jsonb_set(
                        unread_counts, ARRAY[%s::text], {_UNREAD_FROM_LOG}
                    ),
                    updated_at = NOW()
                WHERE id = %s
                RETURNING {_COLUMNS}
            """,
            params=[message_id, sent_at, str(receiver_id), receiver_id, conversation_id],
            context_msg="PostgresConversationRepository: Failed to record message",
            extra={
                "conversation_id": str(conversation_id),
                "message_id": str(message_id),
            },
        )
        return self._to_optional(row)

    def reset_unread(
        self, conversation_id: UUID, user_id: UUID
    ) -> Optional[Conversation]:
        row = self._fetchone_with_row_lock(
            lock_query=_LOCK_CONVERSATION,
            lock_params=[conversation_id],
            query=f"""
                UPDATE conversations
                SET unread_counts = jsonb_set(
                        unread_counts, ARRAY[%s::text], {_UNREAD_FROM_LOG}
                    ),
                    updated_at = NOW()
                WHERE id = %s
                RETURNING {_COLUMNS}
            """,
            params=[str(user_id), user_id, conversation_id],
            context_msg="PostgresConversationRepository: Failed to reset unread",
            extra={"conversation_id": str(conversation_id), "user_id": str(user_id)},
        )
        return self._to_optional(row)

    def apply_message_removal(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        receiver_id: UUID,
        replacement: Optional[Message],
    ) -> Optional[Conversation]:
        """
        R: Repara last message y unread en un único UPDATE.

        Nota: dentro de SET todas las expresiones ven la fila ORIGINAL, por eso
        ambos CASE comparan contra el last_message_id previo.
        """
        replacement_id = replacement.id if replacement else None
        replacement_at = replacement.created_at if replacement else None

        row = self._fetchone_with_row_lock(
            lock_query=_LOCK_CONVERSATION,
            lock_params=[conversation_id],
            query=f"""
                UPDATE conversations
                SET last_message_id = CASE
                        WHEN last_message_id = %s THEN %s::uuid
                        ELSE last_message_id
                    END,
                    last_message_at = CASE
                        WHEN last_message_id = %s THEN %s::timestamptz
                        ELSE last_message_at
                    END,
                    unread_counts = jsonb_set(
                        unread_counts, ARRAY[%s::text], {_UNREAD_FROM_LOG}
                    ),
                    updated_at = NOW()
                WHERE id = %s
                RETURNING {_COLUMNS}
            """,
            params=[
                message_id,
                replacement_id,
                message_id,
                replacement_at,
                str(receiver_id),
                receiver_id,
                conversation_id,
            ],
            context_msg="PostgresConversationRepository: Failed to repair conversation",
            extra={
                "conversation_id": str(conversation_id),
                "message_id": str(message_id),
            },
        )
        return self._to_optional(row)
