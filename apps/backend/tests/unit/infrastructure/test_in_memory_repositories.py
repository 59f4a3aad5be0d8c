"""
Name: In-Memory Repository Tests

Responsibilities:
  - Pair uniqueness enforced by the conversation store
  - Unread entries are recounted from the message log, also under concurrency
  - Defensive copies (callers cannot mutate stored state)
  - Message ordering by (created_at, insertion)
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from projecthub.domain.entities import Conversation, Message
from projecthub.domain.pairing import pair_key
from projecthub.domain.repositories import DuplicateConversationError
from projecthub.infrastructure.repositories.in_memory import (
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryUserDirectory,
)

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _conversation(a, b) -> Conversation:
    key = pair_key(a, b)
    return Conversation(
        id=uuid4(), participants=key, unread_counts={key[0]: 0, key[1]: 0}
    )


def _message(conversation, sender, receiver, *, created_at=None) -> Message:
    return Message(
        id=uuid4(),
        conversation_id=conversation.id,
        sender_id=sender,
        receiver_id=receiver,
        content="hola",
        created_at=created_at,
    )


def _repos():
    messages = InMemoryMessageRepository()
    return InMemoryConversationRepository(messages), messages


@pytest.mark.unit
class TestInMemoryConversationRepository:
    def test_second_insert_for_same_pair_raises(self):
        repo, _ = _repos()
        a, b = uuid4(), uuid4()
        repo.create_conversation(_conversation(a, b))

        with pytest.raises(DuplicateConversationError) as exc_info:
            repo.create_conversation(_conversation(b, a))

        assert exc_info.value.participants == pair_key(a, b)

    def test_returned_objects_are_copies(self):
        repo, _ = _repos()
        a, b = uuid4(), uuid4()
        created = repo.create_conversation(_conversation(a, b))

        created.unread_counts[a] = 99

        assert repo.get_conversation(created.id).unread_for(a) == 0

    def test_concurrent_record_message_counts_every_message(self):
        repo, messages = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(_conversation(a, b))

        def send(_):
            message = messages.add_message(_message(conversation, a, b))
            repo.record_message(
                conversation.id,
                message_id=message.id,
                sent_at=message.created_at,
                receiver_id=b,
            )

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(send, range(200)))

        assert repo.get_conversation(conversation.id).unread_for(b) == 200

    def test_record_message_recounts_from_log(self):
        repo, messages = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(_conversation(a, b))
        already_read = messages.add_message(_message(conversation, a, b))
        messages.mark_read(conversation.id, b, read_at=T0)
        fresh = messages.add_message(_message(conversation, a, b))

        updated = repo.record_message(
            conversation.id, message_id=fresh.id, sent_at=T0, receiver_id=b
        )

        assert messages.get_message(already_read.id).read is True
        assert updated.unread_for(b) == 1

    def test_removal_recounts_from_log(self):
        repo, messages = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(_conversation(a, b))
        message = messages.add_message(_message(conversation, a, b))
        repo.record_message(
            conversation.id, message_id=message.id, sent_at=T0, receiver_id=b
        )
        messages.delete_message(message.id)

        updated = repo.apply_message_removal(
            conversation.id,
            message_id=message.id,
            receiver_id=b,
            replacement=None,
        )

        assert updated.unread_for(b) == 0
        assert updated.last_message_id is None
        assert updated.last_message_at is None

    def test_removal_of_unknown_message_never_goes_negative(self):
        repo, _ = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(_conversation(a, b))

        updated = repo.apply_message_removal(
            conversation.id,
            message_id=uuid4(),
            receiver_id=b,
            replacement=None,
        )

        assert updated.unread_for(b) == 0

    def test_reset_unread_keeps_messages_that_are_still_unread(self):
        repo, messages = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(_conversation(a, b))
        message = messages.add_message(_message(conversation, a, b))
        repo.record_message(
            conversation.id, message_id=message.id, sent_at=T0, receiver_id=b
        )

        assert repo.reset_unread(conversation.id, b).unread_for(b) == 1

        messages.mark_read(conversation.id, b, read_at=T0)

        assert repo.reset_unread(conversation.id, b).unread_for(b) == 0

    def test_missing_unread_entry_counts_as_zero(self):
        repo, messages = _repos()
        a, b = uuid4(), uuid4()
        conversation = repo.create_conversation(
            Conversation(id=uuid4(), participants=pair_key(a, b))
        )
        message = messages.add_message(_message(conversation, b, a))

        updated = repo.record_message(
            conversation.id, message_id=message.id, sent_at=T0, receiver_id=a
        )

        assert updated.unread_for(a) == 1
        assert updated.unread_for(b) == 0

    def test_unknown_conversation_mutations_return_none(self):
        repo, _ = _repos()
        assert repo.reset_unread(uuid4(), uuid4()) is None
        assert (
            repo.record_message(uuid4(), message_id=uuid4(), sent_at=T0, receiver_id=uuid4())
            is None
        )

    def test_list_orders_by_last_activity_with_nulls_last(self):
        repo, _ = _repos()
        me = uuid4()
        idle = repo.create_conversation(
            Conversation(id=uuid4(), participants=pair_key(me, uuid4()), created_at=T0)
        )
        older = repo.create_conversation(_conversation(me, uuid4()))
        newer = repo.create_conversation(_conversation(me, uuid4()))
        repo.record_message(older.id, message_id=uuid4(), sent_at=T0, receiver_id=me)
        repo.record_message(
            newer.id,
            message_id=uuid4(),
            sent_at=T0 + timedelta(hours=1),
            receiver_id=me,
        )

        ids = [c.id for c in repo.list_conversations_for_user(me)]

        assert ids == [newer.id, older.id, idle.id]


@pytest.mark.unit
class TestInMemoryMessageRepository:
    def test_same_timestamp_keeps_insertion_order(self):
        repo = InMemoryMessageRepository()
        a, b = uuid4(), uuid4()
        conversation = _conversation(a, b)
        first = repo.add_message(_message(conversation, a, b, created_at=T0))
        second = repo.add_message(_message(conversation, b, a, created_at=T0))

        assert [m.id for m in repo.list_messages(conversation.id)] == [
            first.id,
            second.id,
        ]
        assert repo.latest_message(conversation.id).id == second.id

    def test_mark_read_only_touches_receiver_messages(self):
        repo = InMemoryMessageRepository()
        a, b = uuid4(), uuid4()
        conversation = _conversation(a, b)
        to_b = repo.add_message(_message(conversation, a, b))
        to_a = repo.add_message(_message(conversation, b, a))

        assert repo.mark_read(conversation.id, b, read_at=T0) == 1
        assert repo.get_message(to_b.id).read_at == T0
        assert repo.get_message(to_a.id).read is False

    def test_delete_reports_whether_it_existed(self):
        repo = InMemoryMessageRepository()
        conversation = _conversation(uuid4(), uuid4())
        message = repo.add_message(
            _message(conversation, *conversation.participants)
        )

        assert repo.delete_message(message.id) is True
        assert repo.delete_message(message.id) is False
        assert repo.latest_message(conversation.id) is None


@pytest.mark.unit
def test_user_directory_batch_lookup_skips_unknown_ids(alice, bob):
    directory = InMemoryUserDirectory([alice, bob])

    found = directory.get_users([alice.id, uuid4(), bob.id])

    assert set(found) == {alice.id, bob.id}
