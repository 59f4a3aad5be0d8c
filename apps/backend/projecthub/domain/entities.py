"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Conversation, Message, Notification)

Responsabilidades:
    - Definir las estructuras centrales de mensajería (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.pairing: orden canónico de participantes.
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan/retornan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Datos + comportamiento mínimo (no “anemia total”, pero sin lógica pesada).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple
from uuid import UUID


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


@dataclass
class Conversation:
    """
    Conversación entre exactamente dos usuarios.

    Importante:
      - participants SIEMPRE en orden canónico (ver domain.pairing.pair_key).
      - unread_counts es un índice derivado del log de mensajes:
        user_id -> cantidad de mensajes no leídos dirigidos a ese usuario.
      - last_message_id es None hasta el primer envío.
    """

    id: UUID
    participants: Tuple[UUID, UUID]
    last_message_id: Optional[UUID] = None
    last_message_at: Optional[datetime] = None
    unread_counts: Dict[UUID, int] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_participant(self, user_id: UUID) -> bool:
        """True si user_id participa de la conversación."""
        return user_id in self.participants

    def other_participant(self, user_id: UUID) -> UUID:
        """Devuelve el otro extremo de la conversación."""
        if not self.has_participant(user_id):
            raise ValueError(f"{user_id} is not a participant of {self.id}")
        first, second = self.participants
        return second if user_id == first else first

    def unread_for(self, user_id: UUID) -> int:
        """Unread del usuario (entrada faltante => 0)."""
        return int(self.unread_counts.get(user_id, 0) or 0)


# ---------------------------------------------------------------------------
# Message
# ---------------------------------------------------------------------------


@dataclass
class Message:
    """
    Mensaje dirigido (sender -> receiver) dentro de una conversación.

    Ciclo de vida:
      - Se crea en el envío (append-only).
      - Solo muta para marcarse como leído (read/read_at).
      - Solo el sender puede borrarlo (hard delete).
    """

    id: UUID
    conversation_id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    read: bool = False
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def mark_read(self, *, at: datetime | None = None) -> None:
        """Transición unread -> read (idempotente)."""
        if self.read:
            return
        self.read = True
        self.read_at = at or _utcnow()


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------


class NotificationType(str, Enum):
    """Tipos de notificación soportados por la plataforma."""

    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    JOIN_REQUEST = "join_request"
    MESSAGE = "message"
    TEAM_INVITE = "team_invite"
    ENDORSEMENT = "endorsement"


@dataclass
class Notification:
    """Evento append-only dirigido a un usuario (recipient)."""

    id: UUID
    recipient_id: UUID
    type: NotificationType
    from_user_id: UUID
    message: str = ""
    read: bool = False
    created_at: Optional[datetime] = None
