"""
===============================================================================
TARJETA CRC — projecthub/interfaces/api/http/routers/notifications.py
===============================================================================

Module:
    Notifications Router

Responsibilities:
    - Listar notificaciones del caller (paginado, filtro unread_only).
    - Marcar una / todas como leídas.

Collaborators:
    - projecthub.application.usecases (notifications)
    - projecthub.identity.auth.require_user
    - projecthub.container (factories DI)

Endpoints:
    GET /notifications
    PUT /notifications/read-all
    PUT /notifications/{notification_id}/read
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from projecthub.application.usecases import (
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from projecthub.container import (
    get_list_notifications_use_case,
    get_mark_all_notifications_read_use_case,
    get_mark_notification_read_use_case,
)
from projecthub.domain.entities import Notification
from projecthub.identity.auth import require_user
from projecthub.identity.users import UserProfile

from ..error_mapping import raise_messaging_error
from ..schemas.notifications import (
    MarkAllNotificationsReadRes,
    MarkNotificationReadRes,
    NotificationRes,
    NotificationsListRes,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _to_notification_res(n: Notification) -> NotificationRes:
    return NotificationRes(
        id=n.id,
        type=n.type,
        from_user_id=n.from_user_id,
        message=n.message,
        read=n.read,
        created_at=n.created_at,
    )


@router.get("", response_model=NotificationsListRes)
def list_notifications(
    unread_only: bool = Query(False),
    limit: int | None = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(require_user()),
    use_case: ListNotificationsUseCase = Depends(get_list_notifications_use_case),
):
    """Notificaciones del caller, más nuevas primero."""
    result = use_case.execute(
        user.id, unread_only=unread_only, limit=limit, offset=offset
    )
    if result.error:
        raise_messaging_error(result.error, resource="Notificación")
    return NotificationsListRes(
        notifications=[_to_notification_res(n) for n in result.notifications],
        unread_total=result.unread_total,
    )


@router.put("/read-all", response_model=MarkAllNotificationsReadRes)
def mark_all_read(
    user: UserProfile = Depends(require_user()),
    use_case: MarkAllNotificationsReadUseCase = Depends(
        get_mark_all_notifications_read_use_case
    ),
):
    result = use_case.execute(user.id)
    return MarkAllNotificationsReadRes(updated=result.updated)


@router.put("/{notification_id}/read", response_model=MarkNotificationReadRes)
def mark_read(
    notification_id: UUID,
    user: UserProfile = Depends(require_user()),
    use_case: MarkNotificationReadUseCase = Depends(
        get_mark_notification_read_use_case
    ),
):
    result = use_case.execute(user.id, notification_id)
    if result.error:
        raise_messaging_error(result.error, resource="Notificación")
    return MarkNotificationReadRes(read=result.read)
