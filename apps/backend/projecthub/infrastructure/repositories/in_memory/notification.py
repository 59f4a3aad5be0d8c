"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/notification.py
============================================================
Class: InMemoryNotificationRepository

Responsibilities:
  - Guardar notificaciones por recipient (append-only).
  - Listar newest-first con paginación limit/offset.
  - Marcar leídas (una / todas) con scope al recipient.

Collaborators:
  - domain.entities.Notification
  - domain.repositories.NotificationRepository
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Tuple
from uuid import UUID

from ....domain.entities import Notification

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryNotificationRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._seq = count(1)
        self._by_user: Dict[UUID, List[Tuple[int, Notification]]] = {}

    def append(self, notification: Notification) -> Notification:
        with self._lock:
            stored = replace(notification)
            stored.created_at = stored.created_at or datetime.now(timezone.utc)
            self._by_user.setdefault(stored.recipient_id, []).append(
                (next(self._seq), stored)
            )
            return replace(stored)

    def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        with self._lock:
            entries = list(self._by_user.get(user_id, []))

        if unread_only:
            entries = [e for e in entries if not e[1].read]

        entries.sort(key=lambda e: (e[1].created_at or _EPOCH, e[0]), reverse=True)
        return [replace(n) for _, n in entries[offset : offset + limit]]

    def count_unread(self, user_id: UUID) -> int:
        with self._lock:
            return sum(1 for _, n in self._by_user.get(user_id, []) if not n.read)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        with self._lock:
            for _, notification in self._by_user.get(user_id, []):
                if notification.id == notification_id:
                    notification.read = True
                    return True
        return False

    def mark_all_read(self, user_id: UUID) -> int:
        updated = 0
        with self._lock:
            for _, notification in self._by_user.get(user_id, []):
                if not notification.read:
                    notification.read = True
                    updated += 1
        return updated
