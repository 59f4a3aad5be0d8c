"""
Name: API Test Fixtures

Responsibilities:
  - Build a FastAPI app with the v1 router and RFC7807 handlers
  - Wire the container factories to per-test in-memory repositories
  - Provide Bearer headers built from real access tokens
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from projecthub import container
from projecthub.api.exception_handlers import register_exception_handlers
from projecthub.crosscutting.middleware import RequestContextMiddleware
from projecthub.identity.auth import create_access_token
from projecthub.interfaces.api.http.router import build_router


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware, metrics_enabled=False)
    register_exception_handlers(app)
    app.include_router(build_router(), prefix="/v1")
    return app


def _provide(instance):
    return lambda: instance


@pytest.fixture
def app(
    user_directory,
    send_message,
    get_thread,
    get_unread_count,
    delete_message,
    list_conversations,
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
) -> FastAPI:
    app = _build_app()
    overrides = {
        container.get_user_directory: user_directory,
        container.get_send_message_use_case: send_message,
        container.get_conversation_thread_use_case: get_thread,
        container.get_unread_count_use_case: get_unread_count,
        container.get_delete_message_use_case: delete_message,
        container.get_list_conversations_use_case: list_conversations,
        container.get_list_notifications_use_case: list_notifications,
        container.get_mark_notification_read_use_case: mark_notification_read,
        container.get_mark_all_notifications_read_use_case: mark_all_notifications_read,
    }
    for dependency, instance in overrides.items():
        app.dependency_overrides[dependency] = _provide(instance)
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
