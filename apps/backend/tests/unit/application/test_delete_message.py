"""
Name: Delete Message Use Case Tests

Responsibilities:
  - Only the sender can delete; unknown messages are NOT_FOUND
  - Conversation is repaired: last message and receiver unread
"""

from uuid import uuid4

import pytest
from projecthub.application.usecases import MessagingErrorCode
from projecthub.domain.pairing import pair_key

pytestmark = pytest.mark.unit


def _conversation(conversation_repo, a, b):
    return conversation_repo.find_by_participants(pair_key(a.id, b.id))


def test_unknown_message_is_not_found(delete_message, alice):
    result = delete_message.execute(alice.id, uuid4())
    assert result.deleted is False
    assert result.error.code == MessagingErrorCode.NOT_FOUND


def test_only_sender_can_delete(send_message, delete_message, message_repo, alice, bob):
    message = send_message.execute(alice.id, bob.id, "hola").message

    result = delete_message.execute(bob.id, message.id)

    assert result.error.code == MessagingErrorCode.FORBIDDEN
    assert message_repo.get_message(message.id) is not None


def test_deleting_last_message_points_to_previous(
    send_message, delete_message, conversation_repo, alice, bob
):
    first = send_message.execute(alice.id, bob.id, "uno").message
    second = send_message.execute(alice.id, bob.id, "dos").message

    result = delete_message.execute(alice.id, second.id)

    assert result.deleted is True
    conversation = _conversation(conversation_repo, alice, bob)
    assert conversation.last_message_id == first.id
    assert conversation.last_message_at == first.created_at


def test_deleting_only_message_clears_last_message(
    send_message, delete_message, conversation_repo, alice, bob
):
    message = send_message.execute(alice.id, bob.id, "hola").message

    delete_message.execute(alice.id, message.id)

    conversation = _conversation(conversation_repo, alice, bob)
    assert conversation.last_message_id is None


def test_deleting_unread_message_decrements_receiver_unread(
    send_message, delete_message, conversation_repo, alice, bob
):
    send_message.execute(alice.id, bob.id, "uno")
    second = send_message.execute(alice.id, bob.id, "dos").message

    delete_message.execute(alice.id, second.id)

    assert _conversation(conversation_repo, alice, bob).unread_for(bob.id) == 1


def test_deleting_read_message_keeps_unread(
    send_message, get_thread, delete_message, conversation_repo, alice, bob
):
    first = send_message.execute(alice.id, bob.id, "uno").message
    get_thread.execute(bob.id, alice.id)
    send_message.execute(alice.id, bob.id, "dos")

    delete_message.execute(alice.id, first.id)

    assert _conversation(conversation_repo, alice, bob).unread_for(bob.id) == 1


def test_deleting_older_message_keeps_last_message(
    send_message, delete_message, conversation_repo, alice, bob
):
    first = send_message.execute(alice.id, bob.id, "uno").message
    second = send_message.execute(alice.id, bob.id, "dos").message

    delete_message.execute(alice.id, first.id)

    assert _conversation(conversation_repo, alice, bob).last_message_id == second.id
