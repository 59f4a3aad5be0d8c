"""
===============================================================================
USE CASE: Mark Notification Read
===============================================================================

Reglas:
    - Scope por recipient: la notificación de otro usuario es NOT_FOUND
      (no se filtra su existencia).
    - Idempotente: marcar una ya leída es éxito.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import NotificationRepository
from ..messaging.messaging_results import MessagingError, MessagingErrorCode
from .notification_results import MarkNotificationReadResult


class MarkNotificationReadUseCase:
    def __init__(self, notification_repository: NotificationRepository) -> None:
        self._notifications = notification_repository

    def execute(
        self, user_id: UUID, notification_id: UUID
    ) -> MarkNotificationReadResult:
        if not self._notifications.mark_read(user_id, notification_id):
            return MarkNotificationReadResult(
                error=MessagingError(
                    code=MessagingErrorCode.NOT_FOUND,
                    message="Notification not found",
                    resource=str(notification_id),
                )
            )
        return MarkNotificationReadResult(read=True)
