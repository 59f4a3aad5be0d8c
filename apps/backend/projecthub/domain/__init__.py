"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el “surface area” del dominio.

Colaboradores:
    - domain.entities: Conversation, Message, Notification
    - domain.pairing: pair_key
    - domain.repositories: Puertos de persistencia

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import Conversation, Message, Notification, NotificationType
from .pairing import PairKey, pair_key
from .repositories import (
    ConversationRepository,
    DuplicateConversationError,
    MessageRepository,
    NotificationRepository,
    UserDirectory,
)

__all__ = [
    # Entities
    "Conversation",
    "Message",
    "Notification",
    "NotificationType",
    # Pairing
    "PairKey",
    "pair_key",
    # Repository Interfaces (Ports)
    "ConversationRepository",
    "MessageRepository",
    "NotificationRepository",
    "UserDirectory",
    "DuplicateConversationError",
]
