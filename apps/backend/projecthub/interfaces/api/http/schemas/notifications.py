"""
===============================================================================
TARJETA CRC — schemas/notifications.py
===============================================================================

Responsabilidades:
    - DTOs de response para /notifications.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from projecthub.domain.entities import NotificationType
from pydantic import BaseModel


class NotificationRes(BaseModel):
    id: UUID
    type: NotificationType
    from_user_id: UUID
    message: str
    read: bool
    created_at: datetime | None = None


class NotificationsListRes(BaseModel):
    notifications: list[NotificationRes]
    unread_total: int


class MarkNotificationReadRes(BaseModel):
    read: bool


class MarkAllNotificationsReadRes(BaseModel):
    updated: int
