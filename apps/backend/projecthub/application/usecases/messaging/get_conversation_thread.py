"""
===============================================================================
USE CASE: Get Conversation Thread
===============================================================================

Business Goal:
    Devolver el hilo completo entre el requester y otro usuario, marcando como
    leídos los mensajes que el requester recibió.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    GetConversationThreadUseCase

Responsibilities:
    - Resolver/crear la conversación (mismas reglas que find-or-create).
    - Bulk read: read=True, read_at=ahora para receiver == requester.
    - Resync atómico del unread del requester contra el log (0 salvo que
      haya llegado un mensaje después del bulk read).
    - Listar mensajes en orden cronológico (creación, luego inserción).

Collaborators:
    - FindOrCreateConversationUseCase
    - MessageRepository.mark_read / list_messages
    - ConversationRepository.reset_unread
    - UserDirectory.get_users

Notas:
    - NO es idempotente respecto del estado de lectura (el primer llamado
      transiciona); sí lo es respecto de contenido y orden.
===============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from ....crosscutting.metrics import record_messages_marked_read
from ....domain.repositories import (
    ConversationRepository,
    MessageRepository,
    UserDirectory,
)
from .find_or_create_conversation import FindOrCreateConversationUseCase
from .messaging_results import ThreadResult

logger = logging.getLogger(__name__)


class GetConversationThreadUseCase:
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        user_directory: UserDirectory,
    ) -> None:
        self._conversations = conversation_repository
        self._messages = message_repository
        self._users = user_directory
        self._find_or_create = FindOrCreateConversationUseCase(
            conversation_repository, user_directory
        )

    def execute(self, requester_id: UUID, other_user_id: UUID) -> ThreadResult:
        resolved = self._find_or_create.execute(requester_id, other_user_id)
        if resolved.error is not None:
            return ThreadResult(error=resolved.error)
        conversation = resolved.conversation

        # Primero transicionar, después listar: el resultado ya refleja read=True
        marked = self._messages.mark_read(
            conversation.id, requester_id, read_at=datetime.now(timezone.utc)
        )
        record_messages_marked_read(marked)

        conversation = (
            self._conversations.reset_unread(conversation.id, requester_id)
            or conversation
        )

        messages = self._messages.list_messages(conversation.id)
        participants = self._users.get_users(conversation.participants)

        if marked:
            logger.info(
                "Messages marked as read",
                extra={"conversation_id": str(conversation.id), "count": marked},
            )

        return ThreadResult(
            conversation=conversation,
            messages=messages,
            participants=participants,
            marked_read=marked,
        )
