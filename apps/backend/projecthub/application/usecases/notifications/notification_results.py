"""
===============================================================================
NOTIFICATION USE CASE RESULTS
===============================================================================

Responsibilities:
    - Resultados tipados para listar / marcar notificaciones.
    - Reusar MessagingError para que la capa HTTP mapee igual que mensajería.

Collaborators:
    - domain.entities.Notification
    - messaging.messaging_results.MessagingError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Notification
from ..messaging.messaging_results import MessagingError


@dataclass
class NotificationListResult:
    notifications: List[Notification] = field(default_factory=list)
    unread_total: int = 0
    error: MessagingError | None = None


@dataclass
class MarkNotificationReadResult:
    read: bool = False
    error: MessagingError | None = None


@dataclass
class MarkAllNotificationsReadResult:
    updated: int = 0
    error: MessagingError | None = None
