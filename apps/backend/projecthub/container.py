"""
===============================================================================
TARJETA CRC — projecthub/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para repositorios.
  - Centralizar decisiones runtime basadas en Settings (memory vs postgres).

Colaboradores:
  - projecthub.crosscutting.config.get_settings
  - projecthub.domain.repositories.* (puertos)
  - projecthub.infrastructure.repositories.* (implementaciones)
  - projecthub.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    DeleteMessageUseCase,
    FindOrCreateConversationUseCase,
    GetConversationThreadUseCase,
    GetUnreadCountUseCase,
    ListConversationsUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    SendMessageUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    ConversationRepository,
    MessageRepository,
    NotificationRepository,
    UserDirectory,
)
from .infrastructure.repositories import (
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryNotificationRepository,
    InMemoryUserDirectory,
    PostgresConversationRepository,
    PostgresMessageRepository,
    PostgresNotificationRepository,
    PostgresUserDirectory,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _use_memory() -> bool:
    """
    Regla:
      - app_env ∈ {"test", "testing", "ci"} o REPOSITORY_BACKEND=memory
        => adapters in-memory.
    """
    return get_settings().uses_memory_backend()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_conversation_repository() -> ConversationRepository:
    if _use_memory():
        return InMemoryConversationRepository(get_message_repository())
    return PostgresConversationRepository()


@lru_cache(maxsize=1)
def get_message_repository() -> MessageRepository:
    if _use_memory():
        return InMemoryMessageRepository()
    return PostgresMessageRepository()


@lru_cache(maxsize=1)
def get_notification_repository() -> NotificationRepository:
    if _use_memory():
        return InMemoryNotificationRepository()
    return PostgresNotificationRepository()


@lru_cache(maxsize=1)
def get_user_directory() -> UserDirectory:
    """Directorio de usuarios (solo lectura; la tabla es del servicio de identidad)."""
    if _use_memory():
        return InMemoryUserDirectory()
    return PostgresUserDirectory()


# =============================================================================
# Use cases (factories)
# =============================================================================


def get_find_or_create_conversation_use_case() -> FindOrCreateConversationUseCase:
    return FindOrCreateConversationUseCase(
        conversation_repository=get_conversation_repository(),
        user_directory=get_user_directory(),
    )


def get_send_message_use_case() -> SendMessageUseCase:
    return SendMessageUseCase(
        conversation_repository=get_conversation_repository(),
        message_repository=get_message_repository(),
        notification_repository=get_notification_repository(),
        user_directory=get_user_directory(),
        max_message_chars=get_settings().max_message_chars,
    )


def get_conversation_thread_use_case() -> GetConversationThreadUseCase:
    return GetConversationThreadUseCase(
        conversation_repository=get_conversation_repository(),
        message_repository=get_message_repository(),
        user_directory=get_user_directory(),
    )


def get_unread_count_use_case() -> GetUnreadCountUseCase:
    return GetUnreadCountUseCase(
        conversation_repository=get_conversation_repository(),
    )


def get_delete_message_use_case() -> DeleteMessageUseCase:
    return DeleteMessageUseCase(
        conversation_repository=get_conversation_repository(),
        message_repository=get_message_repository(),
    )


def get_list_conversations_use_case() -> ListConversationsUseCase:
    return ListConversationsUseCase(
        conversation_repository=get_conversation_repository(),
        message_repository=get_message_repository(),
        user_directory=get_user_directory(),
    )


def get_list_notifications_use_case() -> ListNotificationsUseCase:
    return ListNotificationsUseCase(
        notification_repository=get_notification_repository(),
        default_page_size=get_settings().notifications_page_size,
    )


def get_mark_notification_read_use_case() -> MarkNotificationReadUseCase:
    return MarkNotificationReadUseCase(
        notification_repository=get_notification_repository(),
    )


def get_mark_all_notifications_read_use_case() -> MarkAllNotificationsReadUseCase:
    return MarkAllNotificationsReadUseCase(
        notification_repository=get_notification_repository(),
    )
