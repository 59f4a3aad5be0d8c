"""
Messaging Use Cases

Conversaciones 1:1 y mensajes privados:
- find-or-create de la conversación de un par
- envío, lectura del hilo, borrado
- inbox y badge de no leídos
"""

from .delete_message import DeleteMessageUseCase
from .find_or_create_conversation import FindOrCreateConversationUseCase
from .get_conversation_thread import GetConversationThreadUseCase
from .get_unread_count import GetUnreadCountUseCase
from .list_conversations import ListConversationsUseCase
from .messaging_results import (
    ConversationListResult,
    ConversationResult,
    ConversationSummary,
    DeleteMessageResult,
    MessageResult,
    MessagingError,
    MessagingErrorCode,
    ThreadResult,
    UnreadCountResult,
)
from .send_message import SendMessageUseCase

__all__ = [
    # Use cases
    "FindOrCreateConversationUseCase",
    "SendMessageUseCase",
    "GetConversationThreadUseCase",
    "GetUnreadCountUseCase",
    "DeleteMessageUseCase",
    "ListConversationsUseCase",
    # Results
    "MessagingError",
    "MessagingErrorCode",
    "ConversationResult",
    "MessageResult",
    "ThreadResult",
    "UnreadCountResult",
    "DeleteMessageResult",
    "ConversationSummary",
    "ConversationListResult",
]
