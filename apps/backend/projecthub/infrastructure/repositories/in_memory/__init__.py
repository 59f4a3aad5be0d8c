"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .conversation import InMemoryConversationRepository
from .message import InMemoryMessageRepository
from .notification import InMemoryNotificationRepository
from .user import InMemoryUserDirectory

__all__ = [
    "InMemoryConversationRepository",
    "InMemoryMessageRepository",
    "InMemoryNotificationRepository",
    "InMemoryUserDirectory",
]
