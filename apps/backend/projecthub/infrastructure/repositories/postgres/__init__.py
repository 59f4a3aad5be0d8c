"""
PostgreSQL Repository Implementations.

Production implementations using raw SQL over psycopg_pool.
"""

from .conversation import PostgresConversationRepository
from .message import PostgresMessageRepository
from .notification import PostgresNotificationRepository
from .user import PostgresUserDirectory

__all__ = [
    "PostgresConversationRepository",
    "PostgresMessageRepository",
    "PostgresNotificationRepository",
    "PostgresUserDirectory",
]
