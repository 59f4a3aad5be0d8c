"""
===============================================================================
USE CASE: Get Unread Count
===============================================================================

Business Goal:
    Total de mensajes no leídos del usuario sumando todas sus conversaciones
    (badge del inbox).

Collaborators:
    - ConversationRepository.list_conversations_for_user

Notas:
    - Agregación pura: entradas faltantes cuentan como 0.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import ConversationRepository
from .messaging_results import UnreadCountResult


class GetUnreadCountUseCase:
    def __init__(self, conversation_repository: ConversationRepository) -> None:
        self._conversations = conversation_repository

    def execute(self, user_id: UUID) -> UnreadCountResult:
        conversations = self._conversations.list_conversations_for_user(user_id)
        total = sum(c.unread_for(user_id) for c in conversations)
        return UnreadCountResult(unread_count=total)
