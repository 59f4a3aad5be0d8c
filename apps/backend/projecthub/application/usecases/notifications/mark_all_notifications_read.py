"""
===============================================================================
USE CASE: Mark All Notifications Read
===============================================================================

Devuelve cuántas notificaciones transicionaron (0 si no había pendientes).
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....domain.repositories import NotificationRepository
from .notification_results import MarkAllNotificationsReadResult

logger = logging.getLogger(__name__)


class MarkAllNotificationsReadUseCase:
    def __init__(self, notification_repository: NotificationRepository) -> None:
        self._notifications = notification_repository

    def execute(self, user_id: UUID) -> MarkAllNotificationsReadResult:
        updated = self._notifications.mark_all_read(user_id)
        if updated:
            logger.info("Notifications marked as read", extra={"count": updated})
        return MarkAllNotificationsReadResult(updated=updated)
