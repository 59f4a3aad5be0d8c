"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the messaging domain (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory, etc.).
- Enable dependency inversion and straightforward unit testing (fake/stub repositories).

Collaborators
- domain.entities: Conversation, Message, Notification
- domain.pairing: PairKey
- identity.users: UserProfile
- infrastructure.repositories: postgres.*, in_memory.* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- Conversation mutations (unread counters, last message) MUST be atomic per
  call: implementations apply them as a single storage operation, never as
  read-modify-write in application code.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
- "Not found" is None / False, never an exception.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol
from uuid import UUID

from ..identity.users import UserProfile
from .entities import Conversation, Message, Notification
from .pairing import PairKey


class DuplicateConversationError(Exception):
    """
    R: The unique pair constraint rejected a conversation insert.

    Raised by ConversationRepository.create_conversation when another request
    created the conversation for the same pair first. Callers re-fetch.
    """

    def __init__(self, participants: PairKey):
        self.participants = participants
        super().__init__(
            f"Conversation already exists for pair {participants[0]}/{participants[1]}"
        )


class ConversationRepository(Protocol):
    """
    R: Interface for conversation persistence (one record per unordered pair).

    Implementations must provide:
      - Lookup by canonical pair
      - Creation guarded by a unique constraint on the pair
      - Atomic unread-counter / last-message updates
    """

    def get_conversation(self, conversation_id: UUID) -> Optional[Conversation]:
        """R: Fetch a conversation by ID."""
        ...

    def find_by_participants(self, participants: PairKey) -> Optional[Conversation]:
        """R: Fetch the conversation for a canonical pair (None if absent)."""
        ...

    def create_conversation(self, conversation: Conversation) -> Conversation:
        """
        R: Insert a new conversation.

        Raises:
            DuplicateConversationError: the pair already has a conversation.
        """
        ...

    def list_conversations_for_user(self, user_id: UUID) -> List[Conversation]:
        """
        R: All conversations containing user_id.

        Returns:
            Conversations ordered by last_message_at (descending).
        """
        ...

    def record_message(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        sent_at: datetime,
        receiver_id: UUID,
    ) -> Optional[Conversation]:
        """
        R: Atomically set last message and sync receiver's unread entry.

        The entry is recounted from the message log (unread messages addressed
        to receiver_id) while the conversation row is locked.
        """
        ...

    def reset_unread(
        self, conversation_id: UUID, user_id: UUID
    ) -> Optional[Conversation]:
        """
        R: Atomically sync user's unread entry with the message log.

        Right after MessageRepository.mark_read this is 0, unless a message
        arrived in between (then it stays counted).
        """
        ...

    def apply_message_removal(
        self,
        conversation_id: UUID,
        *,
        message_id: UUID,
        receiver_id: UUID,
        replacement: Optional[Message],
    ) -> Optional[Conversation]:
        """
        R: Repair denormalized fields after a message hard delete.

        Atomically:
          - if last_message_id == message_id => point to replacement (or None)
          - recount receiver's unread entry from the message log
        """
        ...


class MessageRepository(Protocol):
    """
    R: Interface for the append-only, conversation-scoped message log.
    """

    def add_message(self, message: Message) -> Message:
        """R: Append a message to its conversation."""
        ...

    def get_message(self, message_id: UUID) -> Optional[Message]:
        """R: Fetch a single message by ID."""
        ...

    def list_messages(self, conversation_id: UUID) -> List[Message]:
        """
        R: All messages of a conversation.

        Returns:
            Messages ordered by creation time (ascending), insertion order on ties.
        """
        ...

    def latest_message(self, conversation_id: UUID) -> Optional[Message]:
        """R: Newest message of a conversation (None if empty)."""
        ...

    def mark_read(
        self, conversation_id: UUID, receiver_id: UUID, *, read_at: datetime
    ) -> int:
        """
        R: Bulk transition unread -> read for messages addressed to receiver_id.

        Returns:
            Number of messages transitioned.
        """
        ...

    def count_unread(self, conversation_id: UUID, receiver_id: UUID) -> int:
        """R: Messages of the conversation addressed to receiver_id with read = False."""
        ...

    def delete_message(self, message_id: UUID) -> bool:
        """R: Hard delete. True if a row was removed."""
        ...


class NotificationRepository(Protocol):
    """
    R: Append-only notification store keyed by recipient.
    """

    def append(self, notification: Notification) -> Notification:
        """R: Append a notification for its recipient."""
        ...

    def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        """R: Notifications of user_id, newest first."""
        ...

    def count_unread(self, user_id: UUID) -> int:
        """R: Number of unread notifications of user_id."""
        ...

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        """R: Mark one notification as read (scoped to its recipient)."""
        ...

    def mark_all_read(self, user_id: UUID) -> int:
        """R: Mark every unread notification of user_id as read."""
        ...


class UserDirectory(Protocol):
    """
    R: Read-only user identity lookup (owned by the identity service).
    """

    def get_user(self, user_id: UUID) -> Optional[UserProfile]:
        """R: Fetch a user profile (None if unknown)."""
        ...

    def get_users(self, user_ids: Iterable[UUID]) -> Dict[UUID, UserProfile]:
        """R: Batch lookup; unknown IDs are simply absent from the result."""
        ...
