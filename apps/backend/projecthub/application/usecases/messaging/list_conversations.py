"""
===============================================================================
USE CASE: List Conversations (Inbox)
===============================================================================

Business Goal:
    Listar las conversaciones del usuario, la más reciente primero, con los
    datos necesarios para pintar el inbox:
      - perfil del otro participante
      - último mensaje (puede ser None)
      - unread del usuario

Collaborators:
    - ConversationRepository.list_conversations_for_user (ya ordenado)
    - MessageRepository.get_message
    - UserDirectory.get_users (batch)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import (
    ConversationRepository,
    MessageRepository,
    UserDirectory,
)
from .messaging_results import ConversationListResult, ConversationSummary


class ListConversationsUseCase:
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        user_directory: UserDirectory,
    ) -> None:
        self._conversations = conversation_repository
        self._messages = message_repository
        self._users = user_directory

    def execute(self, user_id: UUID) -> ConversationListResult:
        conversations = self._conversations.list_conversations_for_user(user_id)
        if not conversations:
            return ConversationListResult(items=[])

        others = [c.other_participant(user_id) for c in conversations]
        profiles = self._users.get_users(others)

        items = []
        for conversation, other_id in zip(conversations, others):
            last_message = (
                self._messages.get_message(conversation.last_message_id)
                if conversation.last_message_id
                else None
            )
            items.append(
                ConversationSummary(
                    conversation=conversation,
                    other_user_id=other_id,
                    other_user=profiles.get(other_id),
                    last_message=last_message,
                    unread_count=conversation.unread_for(user_id),
                )
            )

        return ConversationListResult(items=items)
