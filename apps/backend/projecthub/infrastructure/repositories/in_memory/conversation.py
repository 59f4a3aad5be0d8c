"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/conversation.py
============================================================
Class: InMemoryConversationRepository

Responsibilities:
  - Almacenar conversaciones en memoria (tests / local dev).
  - Replicar el UNIQUE(user_low, user_high) de Postgres con un índice por par.
  - Aplicar mutaciones de last message de forma atómica (bajo lock).
  - Recontar el unread de un usuario desde el log de mensajes (bajo el mismo
    lock), igual que el UPDATE con subquery de Postgres.
  - Ordenar listados igual que Postgres:
      ORDER BY last_message_at DESC NULLS LAST, created_at DESC

Collaborators:
  - domain.entities.Conversation, Message
  - MessageRepository.count_unread (log de mensajes, fuente de verdad)
  - domain.repositories.ConversationRepository, DuplicateConversationError

Constraints / Notes:
  - Thread-safe: todo el estado se toca bajo Lock.
  - Copias defensivas: nunca se devuelve el objeto interno (unread_counts es mutable).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Conversation, Message
from ....domain.pairing import PairKey
from ....domain.repositories import DuplicateConversationError, MessageRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryConversationRepository:
    """
    Repositorio in-memory, thread-safe, para Conversations.

    Modelo mental:
    - _conversations es la "tabla" (UUID -> Conversation).
    - _by_pair es el índice único (PairKey -> UUID).
    """

    def __init__(self, message_repository: MessageRepository) -> None:
        self._lock = Lock()
        self._messages = message_repository
        self._conversations: Dict[UUID, Conversation] = {}
        self._by_pair: Dict[PairKey, UUID] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _copy(conversation: Conversation) -> Conversation:
        """R: Copia defensiva (unread_counts incluido)."""
        return replace(conversation, unread_counts=dict(conversation.unread_counts))

    @staticmethod
    def _sort_key(conversation: Conversation) -> tuple:
        # DESC NULLS LAST sobre last_message_at, luego created_at DESC
        return (
            conversation.last_message_at is not None,
            conversation.last_message_at or _EPOCH,
            conversation.created_at or _EPOCH,
        )

    # =========================================================
    # Lecturas
    # =========================================================
    def get_conversation(self, conversation_id: UUID) -> Optional[Conversation]:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            return self._copy(conversation) if conversation else None

    def find_by_participants(self, participants: PairKey) -> Optional[Conversation]:
        with self._lock:
            conversation_id = self._by_pair.get(tuple(participants))
            if conversation_id is None:
                return None
            return self._copy(self._conversations[conversation_id])

    def list_conversations_for_user(self, user_id: UUID) -> List[Conversation]:
        with self._lock:
            items = [
                self._copy(c)
                for c in self._conversations.values()
                if c.has_participant(user_id)
            ]
        return sorted(items, key=self._sort_key, reverse=True)

    # =========================================================
    # Escrituras
    # =========================================================
    def create_conversation(self, conversation: Conversation) -> Conversation:
        key: PairKey = tuple(conversation.participants)
        with self._lock:
            if key in self._by_pair:
                raise DuplicateConversationError(key)

            now = self._now()
            stored = self._copy(conversation)
            stored.created_at = stored.created_at or now
            stored.updated_at = stored.updated_at or now

            self._conversations[stored.id] = stored
            self._by_pair[key] = stored.id
            return self._copy(stored)

    def _sync_unread(self, conversation: Conversation, user_id: UUID) -> None:
        # Asume lock tomado
        conversation.unread_counts[user_id] = self._messages.count_unread(
            conversation.id, user_id
        )

    def record_message(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        sent_at: datetime,
        receiver_id: UUID,
    ) -> Optional[Conversation]:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None

            conversation.last_message_id = message_id
            conversation.last_message_at = sent_at
            self._sync_unread(conversation, receiver_id)
            conversation.updated_at = self._now()
            return self._copy(conversation)

    def reset_unread(
        self, conversation_id: UUID, user_id: UUID
    ) -> Optional[Conversation]:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None

            self._sync_unread(conversation, user_id)
            conversation.updated_at = self._now()
            return self._copy(conversation)

    def apply_message_removal(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        receiver_id: UUID,
        replacement: Optional[Message],
    ) -> Optional[Conversation]:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None

            if conversation.last_message_id == message_id:
                conversation.last_message_id = replacement.id if replacement else None
                conversation.last_message_at = (
                    replacement.created_at if replacement else None
                )

            self._sync_unread(conversation, receiver_id)
            conversation.updated_at = self._now()
            return self._copy(conversation)
