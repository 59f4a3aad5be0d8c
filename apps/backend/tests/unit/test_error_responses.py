"""
Name: RFC7807 Error Response Tests

Responsibilities:
  - Factories build AppHTTPException with stable codes
  - Handler renders problem+json with request_id
  - Metrics endpoint normalization keeps cardinality low
"""

import asyncio
import json
from types import SimpleNamespace

import pytest
from projecthub.application.usecases import MessagingError, MessagingErrorCode
from projecthub.crosscutting import metrics
from projecthub.crosscutting.error_responses import (
    PROBLEM_JSON_MEDIA_TYPE,
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    not_found,
    unauthorized,
)
from projecthub.interfaces.api.http.error_mapping import raise_messaging_error

pytestmark = pytest.mark.unit


def _request(request_id=None):
    return SimpleNamespace(
        state=SimpleNamespace(request_id=request_id),
        url="http://testserver/v1/messages/unread-count",
    )


class TestFactories:
    def test_not_found_detail_names_resource(self):
        exc = not_found("Mensaje", "abc")
        assert exc.status_code == 404
        assert exc.code == ErrorCode.NOT_FOUND
        assert exc.detail == "Mensaje 'abc' no encontrado"

    def test_unauthorized_sets_bearer_challenge(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}


class TestHandler:
    def test_problem_payload_shape(self):
        exc = AppHTTPException(422, ErrorCode.VALIDATION_ERROR, "contenido vacío")

        response = asyncio.run(app_exception_handler(_request("req-1"), exc))

        assert response.status_code == 422
        assert response.media_type == PROBLEM_JSON_MEDIA_TYPE
        body = json.loads(response.body)
        assert body["type"] == "about:blank/validation_error"
        assert body["title"] == "Validation Error"
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"] == [{"request_id": "req-1"}]

    def test_errors_omitted_without_request_id(self):
        exc = AppHTTPException(403, ErrorCode.FORBIDDEN, "no")

        body = json.loads(asyncio.run(app_exception_handler(_request(), exc)).body)

        assert "errors" not in body


class TestMessagingErrorMapping:
    @pytest.mark.parametrize(
        "code, status",
        [
            (MessagingErrorCode.VALIDATION_ERROR, 422),
            (MessagingErrorCode.NOT_FOUND, 404),
            (MessagingErrorCode.FORBIDDEN, 403),
        ],
    )
    def test_codes_map_to_http_status(self, code, status):
        with pytest.raises(AppHTTPException) as exc_info:
            raise_messaging_error(
                MessagingError(code=code, message="x", resource="42"),
                resource="Mensaje",
            )
        assert exc_info.value.status_code == status


class TestMetricsNormalization:
    @pytest.mark.parametrize(
        "path, expected",
        [
            (
                "/v1/messages/conversation/2f1c7a9e-5b7d-4c1e-9a43-0c6d1b2e8f10",
                "/v1/messages/conversation/{id}",
            ),
            ("/v1/notifications/123/read", "/v1/notifications/{id}/read"),
            ("/v1/messages/unread-count", "/v1/messages/unread-count"),
        ],
    )
    def test_ids_are_collapsed(self, path, expected):
        assert metrics._normalize_endpoint(path) == expected

    def test_status_buckets(self):
        assert metrics._status_bucket(201) == "2xx"
        assert metrics._status_bucket(404) == "4xx"
        assert metrics._status_bucket(503) == "5xx"

    def test_metrics_payload_is_prometheus_text(self):
        metrics.record_message_sent()

        body, content_type = metrics.get_metrics_response()

        assert content_type.startswith("text/plain")
        assert b"projecthub_messages_sent_total" in body
