"""
Name: Find-or-Create Conversation Use Case Tests

Responsibilities:
  - One conversation per unordered pair (sequential and concurrent)
  - Duplicate-insert race resolved by re-fetch
  - Self-conversation and unknown users rejected
"""

from concurrent.futures import ThreadPoolExecutor
from threading import Barrier
from uuid import uuid4

import pytest
from projecthub.application.usecases import (
    FindOrCreateConversationUseCase,
    MessagingErrorCode,
)
from projecthub.domain.pairing import pair_key
from projecthub.domain.repositories import DuplicateConversationError
from projecthub.infrastructure.repositories.in_memory import (
    InMemoryConversationRepository,
    InMemoryMessageRepository,
)

pytestmark = pytest.mark.unit


def test_creates_conversation_with_seeded_state(find_or_create, alice, bob):
    result = find_or_create.execute(alice.id, bob.id)

    assert result.error is None
    assert result.created is True
    conversation = result.conversation
    assert conversation.participants == pair_key(alice.id, bob.id)
    assert conversation.last_message_id is None
    assert conversation.last_message_at is not None
    assert conversation.unread_for(alice.id) == 0
    assert conversation.unread_for(bob.id) == 0


def test_argument_order_does_not_matter(find_or_create, conversation_repo, alice, bob):
    first = find_or_create.execute(alice.id, bob.id)
    second = find_or_create.execute(bob.id, alice.id)

    assert second.created is False
    assert first.conversation.id == second.conversation.id
    assert len(conversation_repo.list_conversations_for_user(alice.id)) == 1


def test_self_conversation_is_rejected(find_or_create, conversation_repo, alice):
    result = find_or_create.execute(alice.id, alice.id)

    assert result.conversation is None
    assert result.error.code == MessagingErrorCode.VALIDATION_ERROR
    assert conversation_repo.list_conversations_for_user(alice.id) == []


def test_unknown_user_is_not_found(find_or_create, alice):
    stranger = uuid4()
    result = find_or_create.execute(alice.id, stranger)

    assert result.error.code == MessagingErrorCode.NOT_FOUND
    assert result.error.resource == str(stranger)


def test_concurrent_calls_create_exactly_one(conversation_repo, user_directory, alice, bob):
    use_case = FindOrCreateConversationUseCase(conversation_repo, user_directory)
    workers = 16
    barrier = Barrier(workers)

    def call(i: int):
        barrier.wait()
        if i % 2:
            return use_case.execute(alice.id, bob.id)
        return use_case.execute(bob.id, alice.id)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(call, range(workers)))

    ids = {r.conversation.id for r in results}
    assert len(ids) == 1
    assert sum(1 for r in results if r.created) == 1
    assert len(conversation_repo.list_conversations_for_user(alice.id)) == 1


class _LosingRaceRepository(InMemoryConversationRepository):
    """Simula que otro request inserta el par entre el lookup y el insert."""

    def __init__(self):
        super().__init__(InMemoryMessageRepository())
        self._first_lookup = True

    def find_by_participants(self, participants):
        if self._first_lookup:
            self._first_lookup = False
            return None
        return super().find_by_participants(participants)

    def create_conversation(self, conversation):
        winner = type(conversation)(
            id=uuid4(), participants=conversation.participants
        )
        super().create_conversation(winner)
        raise DuplicateConversationError(conversation.participants)


def test_duplicate_insert_returns_the_winner(user_directory, alice, bob):
    repo = _LosingRaceRepository()
    use_case = FindOrCreateConversationUseCase(repo, user_directory)

    result = use_case.execute(alice.id, bob.id)

    assert result.error is None
    assert result.created is False
    stored = repo.find_by_participants(pair_key(alice.id, bob.id))
    assert result.conversation.id == stored.id
