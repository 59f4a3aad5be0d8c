"""
============================================================
TARJETA CRC
============================================================
Class: projecthub.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / local dev)
============================================================
"""

from .in_memory import (
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryNotificationRepository,
    InMemoryUserDirectory,
)
from .postgres import (
    PostgresConversationRepository,
    PostgresMessageRepository,
    PostgresNotificationRepository,
    PostgresUserDirectory,
)

__all__ = [
    # In-memory
    "InMemoryConversationRepository",
    "InMemoryMessageRepository",
    "InMemoryNotificationRepository",
    "InMemoryUserDirectory",
    # Postgres
    "PostgresConversationRepository",
    "PostgresMessageRepository",
    "PostgresNotificationRepository",
    "PostgresUserDirectory",
]
