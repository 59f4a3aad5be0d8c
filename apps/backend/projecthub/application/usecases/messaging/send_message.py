"""
===============================================================================
USE CASE: Send Message
===============================================================================

Business Goal:
    Enviar un mensaje privado de sender a receiver, manteniendo consistentes
    los campos derivados de la conversación (último mensaje, unread del
    receiver) y avisando al receiver con una notificación.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    SendMessageUseCase

Responsibilities:
    - Validar contenido (trim, no vacío, largo máximo).
    - Validar participantes (distintos, receiver existente).
    - Resolver/crear la conversación.
    - Append del mensaje + update atómico de la conversación.
    - Compensar (borrar el mensaje) si el update de la conversación falla.
    - Notificar al receiver (best-effort).

Collaborators:
    - FindOrCreateConversationUseCase
    - ConversationRepository.record_message (atómico en storage)
    - MessageRepository.add_message / delete_message
    - NotificationRepository.append
    - UserDirectory.get_user

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) content.strip() vacío o demasiado largo -> VALIDATION_ERROR.
2) sender == receiver -> VALIDATION_ERROR; receiver desconocido -> NOT_FOUND.
3) Resolver conversación.
4) Append del mensaje (read=False).
5) record_message: last_message + unread[receiver] recontado desde el log
   (un solo UPDATE con la fila de la conversación bloqueada).
6) Si (5) falla: borrar el mensaje de (4) y propagar el error.
7) Notificación "message" al receiver (fallos se loguean y se cuentan).
===============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID, uuid4

from ....crosscutting.metrics import record_message_sent, record_notification_failure
from ....domain.entities import Message, Notification, NotificationType
from ....domain.repositories import (
    ConversationRepository,
    MessageRepository,
    NotificationRepository,
    UserDirectory,
)
from .find_or_create_conversation import FindOrCreateConversationUseCase
from .messaging_results import MessageResult, MessagingError, MessagingErrorCode

logger = logging.getLogger(__name__)

DEFAULT_MAX_MESSAGE_CHARS = 2000
MESSAGE_NOTIFICATION_TEXT = "sent you a message"


class SendMessageUseCase:
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        notification_repository: NotificationRepository,
        user_directory: UserDirectory,
        *,
        max_message_chars: int = DEFAULT_MAX_MESSAGE_CHARS,
    ) -> None:
        self._conversations = conversation_repository
        self._messages = message_repository
        self._notifications = notification_repository
        self._users = user_directory
        self._max_chars = max_message_chars
        self._find_or_create = FindOrCreateConversationUseCase(
            conversation_repository, user_directory
        )

    def execute(
        self, sender_id: UUID, receiver_id: UUID, content: str
    ) -> MessageResult:
        # 1) Validación de contenido
        text = (content or "").strip()
        if not text:
            return self._validation_error("Message content is required")
        if len(text) > self._max_chars:
            return self._validation_error(
                f"Message content exceeds {self._max_chars} characters"
            )

        # 2) Validación de participantes
        if sender_id == receiver_id:
            return self._validation_error("Cannot send a message to yourself")

        receiver = self._users.get_user(receiver_id)
        if receiver is None:
            return MessageResult(
                error=MessagingError(
                    code=MessagingErrorCode.NOT_FOUND,
                    message="User not found",
                    resource=str(receiver_id),
                )
            )

        # 3) Conversación (find-or-create)
        resolved = self._find_or_create.execute(sender_id, receiver_id)
        if resolved.error is not None:
            return MessageResult(error=resolved.error)
        conversation = resolved.conversation

        # 4) Append
        message = self._messages.add_message(
            Message(
                id=uuid4(),
                conversation_id=conversation.id,
                sender_id=sender_id,
                receiver_id=receiver_id,
                content=text,
                created_at=datetime.now(timezone.utc),
            )
        )

        # 5) Update atómico de la conversación (+ compensación)
        try:
            updated = self._conversations.record_message(
                conversation.id,
                message_id=message.id,
                sent_at=message.created_at,
                receiver_id=receiver_id,
            )
        except Exception:
            self._discard(message)
            raise

        if updated is None:
            # La conversación desapareció entre (3) y (5)
            self._discard(message)
            return MessageResult(
                error=MessagingError(
                    code=MessagingErrorCode.NOT_FOUND,
                    message="Conversation not found",
                    resource=str(conversation.id),
                )
            )

        record_message_sent()
        logger.info(
            "Message sent",
            extra={
                "conversation_id": str(conversation.id),
                "message_id": str(message.id),
            },
        )

        # 7) Notificación best-effort
        self._notify_receiver(sender_id=sender_id, receiver_id=receiver_id)

        return MessageResult(
            message=message,
            sender=self._users.get_user(sender_id),
            receiver=receiver,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def _validation_error(message: str) -> MessageResult:
        return MessageResult(
            error=MessagingError(
                code=MessagingErrorCode.VALIDATION_ERROR, message=message
            )
        )

    def _discard(self, message: Message) -> None:
        """Compensación: el caller nunca debe ver un envío a medias."""
        try:
            self._messages.delete_message(message.id)
        except Exception:
            # El error original sigue propagándose; acá solo dejamos rastro.
            logger.exception(
                "Failed to discard message after conversation update failure",
                extra={"message_id": str(message.id)},
            )

    def _notify_receiver(self, *, sender_id: UUID, receiver_id: UUID) -> None:
        try:
            self._notifications.append(
                Notification(
                    id=uuid4(),
                    recipient_id=receiver_id,
                    type=NotificationType.MESSAGE,
                    from_user_id=sender_id,
                    message=MESSAGE_NOTIFICATION_TEXT,
                    created_at=datetime.now(timezone.utc),
                )
            )
        except Exception:
            record_notification_failure(NotificationType.MESSAGE.value)
            logger.exception(
                "Message notification failed",
                extra={"recipient_id": str(receiver_id)},
            )
