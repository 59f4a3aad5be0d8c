"""
===============================================================================
USE CASE: List Notifications
===============================================================================

Business Goal:
    Listar las notificaciones del usuario (más nuevas primero) junto con el
    total de no leídas para el badge.

Collaborators:
    - NotificationRepository (list_for_user / count_unread)

Reglas:
    - limit en [1, max_page_size]; offset >= 0. Fuera de rango -> VALIDATION_ERROR.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import NotificationRepository
from ..messaging.messaging_results import MessagingError, MessagingErrorCode
from .notification_results import NotificationListResult

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


class ListNotificationsUseCase:
    def __init__(
        self,
        notification_repository: NotificationRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._notifications = notification_repository
        self._default_limit = default_page_size

    def execute(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> NotificationListResult:
        limit = self._default_limit if limit is None else limit
        if limit < 1 or limit > MAX_PAGE_SIZE or offset < 0:
            return NotificationListResult(
                error=MessagingError(
                    code=MessagingErrorCode.VALIDATION_ERROR,
                    message=f"limit must be 1..{MAX_PAGE_SIZE} and offset >= 0",
                )
            )

        items = self._notifications.list_for_user(
            user_id, unread_only=unread_only, limit=limit, offset=offset
        )
        return NotificationListResult(
            notifications=items,
            unread_total=self._notifications.count_unread(user_id),
        )
