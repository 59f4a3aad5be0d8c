"""
===============================================================================
TARJETA CRC — schemas/messages.py
===============================================================================

Módulo:
    Schemas HTTP para mensajería

Responsabilidades:
    - Definir DTOs de request/response para /messages.
    - Mantener contratos estables (ids como UUID, fechas ISO-8601).

Colaboradores:
    - routers.messages (mapea entidades -> DTOs)

Notas:
    - La validación de contenido (trim / vacío / largo) vive en el caso de uso,
      así el error sale como RFC7807 con code VALIDATION_ERROR.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class SendMessageReq(BaseModel):
    content: str = Field(..., description="Texto del mensaje (se recorta)")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserSummaryRes(BaseModel):
    id: UUID
    name: str
    avatar_url: str | None = None
    last_active_at: datetime | None = None


class MessageRes(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    sender: UserSummaryRes | None = None
    receiver: UserSummaryRes | None = None


class ConversationRes(BaseModel):
    id: UUID
    participants: list[UUID]
    last_message_id: UUID | None = None
    last_message_at: datetime | None = None
    created_at: datetime | None = None


class ConversationSummaryRes(BaseModel):
    """Fila del inbox."""

    conversation: ConversationRes
    other_user: UserSummaryRes | None = None
    last_message: MessageRes | None = None
    unread_count: int = 0


class ConversationsListRes(BaseModel):
    conversations: list[ConversationSummaryRes]


class ThreadRes(BaseModel):
    conversation: ConversationRes
    messages: list[MessageRes]


class DeleteMessageRes(BaseModel):
    deleted: bool


class UnreadCountRes(BaseModel):
    unread_count: int
