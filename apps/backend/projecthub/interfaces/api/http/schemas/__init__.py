"""DTOs HTTP (pydantic) por feature."""

from .messages import (
    ConversationRes,
    ConversationsListRes,
    ConversationSummaryRes,
    DeleteMessageRes,
    MessageRes,
    SendMessageReq,
    ThreadRes,
    UnreadCountRes,
    UserSummaryRes,
)
from .notifications import (
    MarkAllNotificationsReadRes,
    MarkNotificationReadRes,
    NotificationRes,
    NotificationsListRes,
)

__all__ = [
    "SendMessageReq",
    "UserSummaryRes",
    "MessageRes",
    "ConversationRes",
    "ConversationSummaryRes",
    "ConversationsListRes",
    "ThreadRes",
    "DeleteMessageRes",
    "UnreadCountRes",
    "NotificationRes",
    "NotificationsListRes",
    "MarkNotificationReadRes",
    "MarkAllNotificationsReadRes",
]
