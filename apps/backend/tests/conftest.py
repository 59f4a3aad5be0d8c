"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test => in-memory adapters)
  - Provide seeded user directory and in-memory repositories
  - Provide use case factories wired to those repositories

Collaborators:
  - pytest: Test framework
  - projecthub.infrastructure.repositories.in_memory
  - projecthub.application.usecases

Notes:
  - Fixtures are function-scoped: every test gets fresh repositories
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID, uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_JSON", "false")

from projecthub.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from projecthub.application.usecases import (  # noqa: E402
    DeleteMessageUseCase,
    FindOrCreateConversationUseCase,
    GetConversationThreadUseCase,
    GetUnreadCountUseCase,
    ListConversationsUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    SendMessageUseCase,
)
from projecthub.domain.entities import Notification, NotificationType  # noqa: E402
from projecthub.identity.users import UserProfile  # noqa: E402
from projecthub.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryNotificationRepository,
    InMemoryUserDirectory,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Users
# ============================================================================


@pytest.fixture
def alice() -> UserProfile:
    return UserProfile(
        id=uuid4(),
        name="Alice",
        avatar_url="https://cdn.example.com/alice.png",
        last_active_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def bob() -> UserProfile:
    return UserProfile(id=uuid4(), name="Bob")


@pytest.fixture
def carol() -> UserProfile:
    return UserProfile(id=uuid4(), name="Carol")


@pytest.fixture
def user_directory(alice, bob, carol) -> InMemoryUserDirectory:
    return InMemoryUserDirectory([alice, bob, carol])


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def conversation_repo(message_repo) -> InMemoryConversationRepository:
    return InMemoryConversationRepository(message_repo)


@pytest.fixture
def message_repo() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def notification_repo() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


# ============================================================================
# Use cases
# ============================================================================


@pytest.fixture
def find_or_create(conversation_repo, user_directory):
    return FindOrCreateConversationUseCase(conversation_repo, user_directory)


@pytest.fixture
def send_message(conversation_repo, message_repo, notification_repo, user_directory):
    return SendMessageUseCase(
        conversation_repo,
        message_repo,
        notification_repo,
        user_directory,
        max_message_chars=200,
    )


@pytest.fixture
def get_thread(conversation_repo, message_repo, user_directory):
    return GetConversationThreadUseCase(conversation_repo, message_repo, user_directory)


@pytest.fixture
def get_unread_count(conversation_repo):
    return GetUnreadCountUseCase(conversation_repo)


@pytest.fixture
def delete_message(conversation_repo, message_repo):
    return DeleteMessageUseCase(conversation_repo, message_repo)


@pytest.fixture
def list_conversations(conversation_repo, message_repo, user_directory):
    return ListConversationsUseCase(conversation_repo, message_repo, user_directory)


@pytest.fixture
def list_notifications(notification_repo):
    return ListNotificationsUseCase(notification_repo, default_page_size=50)


@pytest.fixture
def mark_notification_read(notification_repo):
    return MarkNotificationReadUseCase(notification_repo)


@pytest.fixture
def mark_all_notifications_read(notification_repo):
    return MarkAllNotificationsReadUseCase(notification_repo)


@pytest.fixture
def make_notification():
    """Factory: Notification para un recipient con created_at explícito."""

    def _make(
        recipient_id: UUID,
        *,
        from_user_id: UUID | None = None,
        type: NotificationType = NotificationType.FOLLOW,
        created_at: datetime | None = None,
        read: bool = False,
    ) -> Notification:
        return Notification(
            id=uuid4(),
            recipient_id=recipient_id,
            type=type,
            from_user_id=from_user_id or uuid4(),
            message="started following you",
            read=read,
            created_at=created_at,
        )

    return _make
