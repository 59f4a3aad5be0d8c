"""
Name: Messages Endpoint Tests

Responsibilities:
  - Authentication required on every messaging route
  - Send / thread / inbox / unread-count / delete over HTTP
  - Business errors rendered as RFC7807 problem+json
"""

from uuid import uuid4

import pytest
from projecthub.crosscutting.error_responses import PROBLEM_JSON_MEDIA_TYPE

pytestmark = pytest.mark.unit


def _send(client, headers, to, content="hola"):
    return client.post(f"/v1/messages/send/{to.id}", json={"content": content}, headers=headers)


class TestAuthentication:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/v1/messages/conversations"),
            ("get", f"/v1/messages/conversation/{uuid4()}"),
            ("get", "/v1/messages/unread-count"),
            ("delete", f"/v1/messages/{uuid4()}"),
        ],
    )
    def test_missing_token_is_401(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 401
        assert response.headers["content-type"].startswith(PROBLEM_JSON_MEDIA_TYPE)
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_garbage_token_is_401(self, client):
        response = client.get(
            "/v1/messages/unread-count",
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401

    def test_token_for_unknown_user_is_401(self, client, auth_headers):
        from projecthub.identity.users import UserProfile

        ghost = UserProfile(id=uuid4(), name="Ghost")
        response = client.get("/v1/messages/unread-count", headers=auth_headers(ghost))
        assert response.status_code == 401


class TestSend:
    def test_send_returns_201_with_profiles(self, client, auth_headers, alice, bob):
        response = _send(client, auth_headers(alice), bob, "  hola bob ")

        assert response.status_code == 201
        body = response.json()
        assert body["content"] == "hola bob"
        assert body["read"] is False
        assert body["sender"]["name"] == "Alice"
        assert body["receiver"]["id"] == str(bob.id)

    def test_blank_content_is_422_problem(self, client, auth_headers, alice, bob):
        response = _send(client, auth_headers(alice), bob, "   ")

        assert response.status_code == 422
        assert response.headers["content-type"].startswith(PROBLEM_JSON_MEDIA_TYPE)
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_send_to_self_is_422(self, client, auth_headers, alice):
        assert _send(client, auth_headers(alice), alice).status_code == 422

    def test_unknown_receiver_is_404(self, client, auth_headers, alice):
        response = client.post(
            f"/v1/messages/send/{uuid4()}",
            json={"content": "hola"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_problem_carries_request_id(self, client, auth_headers, alice):
        response = _send(client, auth_headers(alice), alice)

        request_id = response.headers["X-Request-Id"]
        assert {"request_id": request_id} in response.json()["errors"]


class TestThreadAndInbox:
    def test_thread_marks_messages_read(self, client, auth_headers, alice, bob):
        _send(client, auth_headers(alice), bob, "uno")
        _send(client, auth_headers(alice), bob, "dos")

        assert client.get(
            "/v1/messages/unread-count", headers=auth_headers(bob)
        ).json() == {"unread_count": 2}

        response = client.get(
            f"/v1/messages/conversation/{alice.id}", headers=auth_headers(bob)
        )

        assert response.status_code == 200
        messages = response.json()["messages"]
        assert [m["content"] for m in messages] == ["uno", "dos"]
        assert all(m["read"] and m["read_at"] for m in messages)
        assert client.get(
            "/v1/messages/unread-count", headers=auth_headers(bob)
        ).json() == {"unread_count": 0}

    def test_thread_with_unknown_user_is_404(self, client, auth_headers, alice):
        response = client.get(
            f"/v1/messages/conversation/{uuid4()}", headers=auth_headers(alice)
        )
        assert response.status_code == 404

    def test_inbox_lists_other_user_and_unread(self, client, auth_headers, alice, bob):
        _send(client, auth_headers(bob), alice, "hola alice")

        response = client.get("/v1/messages/conversations", headers=auth_headers(alice))

        assert response.status_code == 200
        [row] = response.json()["conversations"]
        assert row["other_user"]["name"] == "Bob"
        assert row["last_message"]["content"] == "hola alice"
        assert row["unread_count"] == 1


class TestDelete:
    def test_sender_deletes_message(self, client, auth_headers, alice, bob):
        sent = _send(client, auth_headers(alice), bob).json()

        response = client.delete(f"/v1/messages/{sent['id']}", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json() == {"deleted": True}
        assert client.get(
            "/v1/messages/unread-count", headers=auth_headers(bob)
        ).json() == {"unread_count": 0}

    def test_receiver_cannot_delete(self, client, auth_headers, alice, bob):
        sent = _send(client, auth_headers(alice), bob).json()

        response = client.delete(f"/v1/messages/{sent['id']}", headers=auth_headers(bob))

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_unknown_message_is_404(self, client, auth_headers, alice):
        response = client.delete(f"/v1/messages/{uuid4()}", headers=auth_headers(alice))
        assert response.status_code == 404


def test_database_failure_is_503_problem(client, app, auth_headers, alice, bob):
    from projecthub import container
    from projecthub.crosscutting.exceptions import DatabaseError

    class _Broken:
        def execute(self, user_id):
            raise DatabaseError("connection lost")

    app.dependency_overrides[container.get_unread_count_use_case] = _Broken

    response = client.get("/v1/messages/unread-count", headers=auth_headers(alice))

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "DATABASE_ERROR"
    assert "connection lost" not in body["detail"]
