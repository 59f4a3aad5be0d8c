"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── messaging/       # Conversations, messages, unread counters
└── notifications/   # Per-user notification inbox

Usage
-----
    from projecthub.application.usecases.messaging import SendMessageUseCase

Or use the barrel exports from this module:

    from projecthub.application.usecases import SendMessageUseCase
"""

# Messaging
from .messaging import (
    ConversationListResult,
    ConversationResult,
    ConversationSummary,
    DeleteMessageResult,
    DeleteMessageUseCase,
    FindOrCreateConversationUseCase,
    GetConversationThreadUseCase,
    GetUnreadCountUseCase,
    ListConversationsUseCase,
    MessageResult,
    MessagingError,
    MessagingErrorCode,
    SendMessageUseCase,
    ThreadResult,
    UnreadCountResult,
)

# Notifications
from .notifications import (
    ListNotificationsUseCase,
    MarkAllNotificationsReadResult,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadResult,
    MarkNotificationReadUseCase,
    NotificationListResult,
)

__all__ = [
    # Messaging
    "FindOrCreateConversationUseCase",
    "SendMessageUseCase",
    "GetConversationThreadUseCase",
    "GetUnreadCountUseCase",
    "DeleteMessageUseCase",
    "ListConversationsUseCase",
    "MessagingError",
    "MessagingErrorCode",
    "ConversationResult",
    "MessageResult",
    "ThreadResult",
    "UnreadCountResult",
    "DeleteMessageResult",
    "ConversationSummary",
    "ConversationListResult",
    # Notifications
    "ListNotificationsUseCase",
    "MarkNotificationReadUseCase",
    "MarkAllNotificationsReadUseCase",
    "NotificationListResult",
    "MarkNotificationReadResult",
    "MarkAllNotificationsReadResult",
]
