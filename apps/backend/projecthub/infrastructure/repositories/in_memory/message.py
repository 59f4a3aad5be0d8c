"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/message.py
============================================================
Class: InMemoryMessageRepository

Responsibilities:
  - Guardar el log de mensajes por conversación (append-only + hard delete).
  - Ordenar como Postgres: created_at ASC, seq ASC (orden de inserción).
  - Marcar como leídos en bloque los mensajes dirigidos a un receiver.

Collaborators:
  - domain.entities.Message
  - domain.repositories.MessageRepository

Constraints / Notes:
  - Thread-safe: Lock.
  - Copias defensivas en todas las lecturas.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from ....domain.entities import Message

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryMessageRepository:
    """R: Repositorio in-memory para Messages (seq emula la identity de Postgres)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._seq = count(1)
        # id -> (seq, message)
        self._messages: Dict[UUID, Tuple[int, Message]] = {}

    @staticmethod
    def _sort_key(entry: Tuple[int, Message]) -> tuple:
        seq, message = entry
        return (message.created_at or _EPOCH, seq)

    def _ordered(self, conversation_id: UUID) -> List[Message]:
        # Asume lock tomado
        entries = [
            e for e in self._messages.values() if e[1].conversation_id == conversation_id
        ]
        return [m for _, m in sorted(entries, key=self._sort_key)]

    def add_message(self, message: Message) -> Message:
        with self._lock:
            stored = replace(message)
            stored.created_at = stored.created_at or datetime.now(timezone.utc)
            self._messages[stored.id] = (next(self._seq), stored)
            return replace(stored)

    def get_message(self, message_id: UUID) -> Optional[Message]:
        with self._lock:
            entry = self._messages.get(message_id)
            return replace(entry[1]) if entry else None

    def list_messages(self, conversation_id: UUID) -> List[Message]:
        with self._lock:
            return [replace(m) for m in self._ordered(conversation_id)]

    def latest_message(self, conversation_id: UUID) -> Optional[Message]:
        with self._lock:
            ordered = self._ordered(conversation_id)
            return replace(ordered[-1]) if ordered else None

    def mark_read(
        self, conversation_id: UUID, receiver_id: UUID, *, read_at: datetime
    ) -> int:
        updated = 0
        with self._lock:
            for _, message in self._messages.values():
                if (
                    message.conversation_id == conversation_id
                    and message.receiver_id == receiver_id
                    and not message.read
                ):
                    message.mark_read(at=read_at)
                    updated += 1
        return updated

    def count_unread(self, conversation_id: UUID, receiver_id: UUID) -> int:
        with self._lock:
            return sum(
                1
                for _, m in self._messages.values()
                if m.conversation_id == conversation_id
                and m.receiver_id == receiver_id
                and not m.read
            )

    def delete_message(self, message_id: UUID) -> bool:
        with self._lock:
            return self._messages.pop(message_id, None) is not None
