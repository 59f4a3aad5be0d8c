"""Notification Use Cases (inbox de eventos por usuario)."""

from .list_notifications import ListNotificationsUseCase
from .mark_all_notifications_read import MarkAllNotificationsReadUseCase
from .mark_notification_read import MarkNotificationReadUseCase
from .notification_results import (
    MarkAllNotificationsReadResult,
    MarkNotificationReadResult,
    NotificationListResult,
)

__all__ = [
    "ListNotificationsUseCase",
    "MarkNotificationReadUseCase",
    "MarkAllNotificationsReadUseCase",
    "NotificationListResult",
    "MarkNotificationReadResult",
    "MarkAllNotificationsReadResult",
]
