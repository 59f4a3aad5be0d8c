"""
===============================================================================
USE CASE: Delete Message
===============================================================================

Business Goal:
    Permitir al sender borrar (hard delete) un mensaje propio sin dejar la
    conversación inconsistente.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    DeleteMessageUseCase

Responsibilities:
    - NOT_FOUND si el mensaje no existe.
    - FORBIDDEN si el requester no es el sender.
    - Hard delete.
    - Reparar la conversación en un único update:
        * last_message -> mensaje más nuevo restante (o None)
        * unread del receiver recontado desde el log de mensajes

Collaborators:
    - MessageRepository (get_message / delete_message / latest_message)
    - ConversationRepository.apply_message_removal
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....crosscutting.metrics import record_message_deleted
from ....domain.repositories import ConversationRepository, MessageRepository
from .messaging_results import (
    DeleteMessageResult,
    MessagingError,
    MessagingErrorCode,
)

logger = logging.getLogger(__name__)


class DeleteMessageUseCase:
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> None:
        self._conversations = conversation_repository
        self._messages = message_repository

    def execute(self, requester_id: UUID, message_id: UUID) -> DeleteMessageResult:
        message = self._messages.get_message(message_id)
        if message is None:
            return self._not_found(message_id)

        if message.sender_id != requester_id:
            return DeleteMessageResult(
                error=MessagingError(
                    code=MessagingErrorCode.FORBIDDEN,
                    message="Not authorized to delete this message",
                    resource=str(message_id),
                )
            )

        if not self._messages.delete_message(message_id):
            # Borrado concurrente entre get y delete
            return self._not_found(message_id)

        replacement = self._messages.latest_message(message.conversation_id)
        self._conversations.apply_message_removal(
            message.conversation_id,
            message_id=message.id,
            receiver_id=message.receiver_id,
            replacement=replacement,
        )

        record_message_deleted()
        logger.info(
            "Message deleted",
            extra={
                "conversation_id": str(message.conversation_id),
                "message_id": str(message.id),
            },
        )
        return DeleteMessageResult(deleted=True)

    @staticmethod
    def _not_found(message_id: UUID) -> DeleteMessageResult:
        return DeleteMessageResult(
            error=MessagingError(
                code=MessagingErrorCode.NOT_FOUND,
                message="Message not found",
                resource=str(message_id),
            )
        )
