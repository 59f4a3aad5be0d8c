"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) — Observabilidad de bajo acoplamiento

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO conversation_id, NO IDs dinámicos).
    - Exponer helper para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - application/usecases/messaging: registra envíos, borrados, fallos de
      notificación y conversaciones creadas.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "projecthub_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "projecthub_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

# ------------------------
# Mensajería
# ------------------------
_messages_sent_total = Counter(
    "projecthub_messages_sent_total",
    "Mensajes enviados",
    registry=_registry,
)

_messages_deleted_total = Counter(
    "projecthub_messages_deleted_total",
    "Mensajes borrados por su sender",
    registry=_registry,
)

_messages_marked_read_total = Counter(
    "projecthub_messages_marked_read_total",
    "Mensajes que transicionaron a leído",
    registry=_registry,
)

_conversations_created_total = Counter(
    "projecthub_conversations_created_total",
    "Conversaciones creadas (find-or-create)",
    registry=_registry,
)

_conversation_create_races_total = Counter(
    "projecthub_conversation_create_races_total",
    "Inserts rechazados por unicidad del par (resueltos con re-fetch)",
    registry=_registry,
)

_notification_failures_total = Counter(
    "projecthub_notification_failures_total",
    "Fallos best-effort al notificar",
    ["type"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_message_sent(count: int = 1) -> None:
    _messages_sent_total.inc(count)


def record_message_deleted(count: int = 1) -> None:
    _messages_deleted_total.inc(count)


def record_messages_marked_read(count: int) -> None:
    if count > 0:
        _messages_marked_read_total.inc(count)


def record_conversation_created(count: int = 1) -> None:
    _conversations_created_total.inc(count)


def record_conversation_create_race(count: int = 1) -> None:
    _conversation_create_races_total.inc(count)


def record_notification_failure(notification_type: str) -> None:
    _notification_failures_total.labels(type=notification_type).inc()


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta.

    Reemplaza UUIDs e IDs numéricos por `{id}`.
    """
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    return "5xx"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
