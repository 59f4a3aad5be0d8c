"""
===============================================================================
USE CASE: Find or Create Conversation
===============================================================================

Business Goal:
    Resolver la ÚNICA conversación entre dos usuarios, creándola si todavía no
    existe. El orden de los argumentos no importa.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    FindOrCreateConversationUseCase

Responsibilities:
    - Rechazar auto-conversaciones (VALIDATION_ERROR).
    - Verificar que ambos usuarios existan (NOT_FOUND).
    - Buscar por par canónico y crear si falta.
    - Resolver la carrera de creación: si el insert choca con la unicidad del
      par, releer y devolver la conversación ganadora.

Collaborators:
    - ConversationRepository (find_by_participants / create_conversation)
    - UserDirectory (get_user)
    - domain.pairing.pair_key

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) Una conversación por par no ordenado (constraint de storage).
R2) Al crear: last_message=None, last_message_at=ahora, unread {a:0, b:0}.
R3) N llamados concurrentes => exactamente un registro.
===============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID, uuid4

from ....crosscutting.metrics import (
    record_conversation_create_race,
    record_conversation_created,
)
from ....domain.entities import Conversation
from ....domain.pairing import pair_key
from ....domain.repositories import (
    ConversationRepository,
    DuplicateConversationError,
    UserDirectory,
)
from .messaging_results import (
    ConversationResult,
    MessagingError,
    MessagingErrorCode,
)

logger = logging.getLogger(__name__)


class FindOrCreateConversationUseCase:
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        user_directory: UserDirectory,
    ) -> None:
        self._conversations = conversation_repository
        self._users = user_directory

    def execute(self, user_a: UUID, user_b: UUID) -> ConversationResult:
        # 1) Guard: no hay conversaciones con uno mismo
        if user_a == user_b:
            return ConversationResult(
                error=MessagingError(
                    code=MessagingErrorCode.VALIDATION_ERROR,
                    message="Cannot start a conversation with yourself",
                )
            )

        # 2) Ambos extremos deben existir
        found = self._users.get_users([user_a, user_b])
        for user_id in (user_a, user_b):
            if user_id not in found:
                return ConversationResult(
                    error=MessagingError(
                        code=MessagingErrorCode.NOT_FOUND,
                        message="User not found",
                        resource=str(user_id),
                    )
                )

        # 3) Lookup por par canónico
        participants = pair_key(user_a, user_b)
        existing = self._conversations.find_by_participants(participants)
        if existing is not None:
            return ConversationResult(conversation=existing)

        # 4) Crear (el storage garantiza unicidad del par)
        now = datetime.now(timezone.utc)
        candidate = Conversation(
            id=uuid4(),
            participants=participants,
            last_message_id=None,
            last_message_at=now,
            unread_counts={participants[0]: 0, participants[1]: 0},
            created_at=now,
            updated_at=now,
        )
        try:
            created = self._conversations.create_conversation(candidate)
        except DuplicateConversationError:
            # Otro request ganó la carrera: releer
            record_conversation_create_race()
            winner = self._conversations.find_by_participants(participants)
            if winner is None:
                raise
            logger.info(
                "Conversation creation race resolved",
                extra={"conversation_id": str(winner.id)},
            )
            return ConversationResult(conversation=winner)

        record_conversation_created()
        logger.info(
            "Conversation created",
            extra={"conversation_id": str(created.id)},
        )
        return ConversationResult(conversation=created, created=True)
