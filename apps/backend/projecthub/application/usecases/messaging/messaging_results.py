"""
===============================================================================
MESSAGING USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de mensajería, con un contrato estable y explícito para:
      - validaciones (contenido vacío, auto-conversación, etc.)
      - recursos no encontrados (usuario / mensaje)
      - autorización (solo el sender borra)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    messaging_results models (module)

Responsibilities:
    - Definir MessagingErrorCode (set acotado y estable).
    - Representar MessagingError (code + message).
    - Representar resultados por operación (conversation, message, thread,
      unread count, delete, listado de conversaciones).

Collaborators:
    - domain.entities.Conversation, Message
    - identity.users.UserProfile (datos de display)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List
from uuid import UUID

from ....domain.entities import Conversation, Message
from ....identity.users import UserProfile


class MessagingErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input inválido (contenido vacío/largo, mismo usuario).
      - NOT_FOUND: usuario o mensaje inexistente.
      - FORBIDDEN: el actor no puede operar sobre el recurso.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True)
class MessagingError:
    code: MessagingErrorCode
    message: str
    resource: str | None = None


@dataclass
class ConversationResult:
    """
    Resultado de find-or-create.

    created=True solo si ESTE llamado insertó la conversación.
    """

    conversation: Conversation | None = None
    created: bool = False
    error: MessagingError | None = None


@dataclass
class MessageResult:
    message: Message | None = None
    sender: UserProfile | None = None
    receiver: UserProfile | None = None
    error: MessagingError | None = None


@dataclass
class ThreadResult:
    """
    Hilo completo entre requester y otro usuario.

    Contrato:
      - messages en orden cronológico (más viejo primero)
      - messages refleja el estado de lectura POST transición
      - participants: perfiles por user_id (para display)
    """

    conversation: Conversation | None = None
    messages: List[Message] = field(default_factory=list)
    participants: Dict[UUID, UserProfile] = field(default_factory=dict)
    marked_read: int = 0
    error: MessagingError | None = None


@dataclass
class UnreadCountResult:
    unread_count: int = 0
    error: MessagingError | None = None


@dataclass
class DeleteMessageResult:
    deleted: bool = False
    error: MessagingError | None = None


@dataclass
class ConversationSummary:
    """Fila del inbox: conversación + otro participante + último mensaje."""

    conversation: Conversation
    other_user_id: UUID
    other_user: UserProfile | None = None
    last_message: Message | None = None
    unread_count: int = 0


@dataclass
class ConversationListResult:
    items: List[ConversationSummary] = field(default_factory=list)
    error: MessagingError | None = None
